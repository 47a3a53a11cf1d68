"""
ECIES Security Operations

- EciesCodec: configurable encrypt/decrypt bound to a key pair
- ecies_encrypt / ecies_decrypt: functional interface

Author: ecies-mue Project
Date: October 2026
"""

from .ecies import EciesCodec, ecies_encrypt, ecies_decrypt

__all__ = [
    # Class interface
    "EciesCodec",

    # Functional interface
    "ecies_encrypt",
    "ecies_decrypt",
]
