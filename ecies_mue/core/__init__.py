"""
ECIES Core Types and Utilities

Submodules:
- types: Constants, KeyEncoding, EciesOptions, DerivedKeys
- primitives: Public key point encoding/decoding, frame key field parsing
- keys: PrivateKey / PublicKey wrappers
- crypto: ECDH, HMAC-SHA512 KDF, AES-256-CBC, HMAC-SHA256 tags

Author: ecies-mue Project
Date: October 2026
"""

# Re-export all core functionality for convenience
from .types import (
    # Constants
    SECP256K1_ORDER,
    COORDINATE_SIZE,
    COMPRESSED_KEY_SIZE,
    UNCOMPRESSED_KEY_SIZE,

    # Types
    KeyEncoding,
    EciesOptions,
    DerivedKeys,
)

from .primitives import (
    encode_public_key,
    decode_public_key,
    parse_key_encoding,
    parse_public_key_field,
)

from .keys import (
    PrivateKey,
    PublicKey,
    coerce_private_key,
    coerce_public_key,
)

from .crypto import (
    compute_ecdh_shared_secret,
    derive_keys_hmac_sha512,
    hmac_sha256,
    compute_tag,
    tags_equal,
    generate_iv,
    derive_deterministic_iv,
    aes256_cbc_encrypt,
    aes256_cbc_decrypt,
)

__all__ = [
    # Constants
    "SECP256K1_ORDER",
    "COORDINATE_SIZE",
    "COMPRESSED_KEY_SIZE",
    "UNCOMPRESSED_KEY_SIZE",

    # Types
    "KeyEncoding",
    "EciesOptions",
    "DerivedKeys",

    # Encoding
    "encode_public_key",
    "decode_public_key",
    "parse_key_encoding",
    "parse_public_key_field",

    # Keys
    "PrivateKey",
    "PublicKey",
    "coerce_private_key",
    "coerce_public_key",

    # Crypto
    "compute_ecdh_shared_secret",
    "derive_keys_hmac_sha512",
    "hmac_sha256",
    "compute_tag",
    "tags_equal",
    "generate_iv",
    "derive_deterministic_iv",
    "aes256_cbc_encrypt",
    "aes256_cbc_decrypt",
]
