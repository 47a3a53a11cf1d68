"""
ecies-mue: Elliptic Curve Integrated Encryption Scheme on secp256k1

Encrypts a message for a recipient public key with ECDH key agreement,
HMAC-SHA512 key derivation, AES-256-CBC and an HMAC-SHA256 tag, packed
into a single frame:

    [sender public key] || iv || ciphertext || tag

Module Structure:
- core/: Types, key wrappers, point encoding and crypto primitives
- security/: EciesCodec and the functional interface
- config/: Centralized constants
- utils/: Logging

Author: ecies-mue Project
Date: October 2026
"""

__version__ = "1.0.0"

from .core import (
    KeyEncoding,
    EciesOptions,
    DerivedKeys,
    PrivateKey,
    PublicKey,
)

from .exceptions import (
    ECIESError,
    MissingKeyError,
    ConfigurationError,
    FormatError,
    IntegrityError,
)

from .security import (
    EciesCodec,
    ecies_encrypt,
    ecies_decrypt,
)

__all__ = [
    # Version
    "__version__",

    # Types
    "KeyEncoding",
    "EciesOptions",
    "DerivedKeys",
    "PrivateKey",
    "PublicKey",

    # Errors
    "ECIESError",
    "MissingKeyError",
    "ConfigurationError",
    "FormatError",
    "IntegrityError",

    # Codec
    "EciesCodec",
    "ecies_encrypt",
    "ecies_decrypt",
]
