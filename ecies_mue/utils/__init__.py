"""
Utils Package

Contains the logging utilities.
"""

from .logger import EciesLogger

__all__ = [
    # Logging
    "EciesLogger",
]
