"""
ECIES Configuration Package

Centralizza costanti e opzioni di default del codec.
"""

from .ecies_config import (
    ECIES_CONSTANTS,
    EciesConstants,
    get_default_options,
)

__all__ = [
    'ECIES_CONSTANTS',
    'EciesConstants',
    'get_default_options',
]
