"""
ECIES Core Types and Constants

Basic type definitions shared by the codec:
- Curve constants (secp256k1)
- KeyEncoding: tagged variant for compressed / uncompressed public keys
- EciesOptions: immutable per-codec (or per-call) option set
- DerivedKeys: (enc_key, mac_key) pair produced by the KDF

Author: ecies-mue Project
Date: October 2026
"""

from dataclasses import dataclass
from enum import Enum

from cryptography.hazmat.primitives.asymmetric import ec

from ecies_mue.config.ecies_config import ECIES_CONSTANTS


# ============================================================================
# CURVE CONSTANTS
# ============================================================================

# secp256k1 group order (SEC 2, Section 2.4.1)
SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# Field element / scalar size
COORDINATE_SIZE = 32

COMPRESSED_KEY_SIZE = 1 + COORDINATE_SIZE
UNCOMPRESSED_KEY_SIZE = 1 + 2 * COORDINATE_SIZE


def curve() -> ec.EllipticCurve:
    """Curve used by every key in this package."""
    return ec.SECP256K1()


# ============================================================================
# ENUMS
# ============================================================================


class KeyEncoding(Enum):
    """
    SEC 1 point encoding of a public key.

    The frame carries no explicit format indicator: the encoding of an
    embedded sender key is recognized from its leading byte.
    """

    COMPRESSED = "compressed"  # 0x02 / 0x03 || x
    UNCOMPRESSED = "uncompressed"  # 0x04 || x || y

    @property
    def size(self) -> int:
        if self is KeyEncoding.COMPRESSED:
            return COMPRESSED_KEY_SIZE
        return UNCOMPRESSED_KEY_SIZE

    @classmethod
    def from_prefix(cls, prefix: int) -> "KeyEncoding":
        """
        Map the leading byte of an encoded point to its encoding.

        Raises:
            ValueError: If the prefix is not 0x02, 0x03 or 0x04
        """
        if prefix in (0x02, 0x03):
            return cls.COMPRESSED
        if prefix == 0x04:
            return cls.UNCOMPRESSED
        raise ValueError(f"Invalid public key prefix: 0x{prefix:02x} (expected 0x02, 0x03 or 0x04)")

    @classmethod
    def from_compressed_flag(cls, compressed: bool) -> "KeyEncoding":
        return cls.COMPRESSED if compressed else cls.UNCOMPRESSED


# ============================================================================
# OPTIONS AND DERIVED MATERIAL
# ============================================================================


@dataclass(frozen=True)
class EciesOptions:
    """
    Frame options agreed out of band by both parties.

    Attributes:
        no_key: Omit the sender public key from the frame
        short_tag: Truncate the authentication tag to 4 bytes
        deterministic_iv: Derive the IV from the private key and the message
            instead of drawing it at random (same message -> same frame)
    """

    no_key: bool = False
    short_tag: bool = False
    deterministic_iv: bool = False

    @property
    def tag_length(self) -> int:
        if self.short_tag:
            return ECIES_CONSTANTS.SHORT_TAG_SIZE
        return ECIES_CONSTANTS.FULL_TAG_SIZE

    def replace(self, **changes) -> "EciesOptions":
        """Return a copy with the given flags changed (None keeps the current value)."""
        values = {
            "no_key": self.no_key,
            "short_tag": self.short_tag,
            "deterministic_iv": self.deterministic_iv,
        }
        for name, value in changes.items():
            if name not in values:
                raise TypeError(f"Unknown ECIES option: {name}")
            if value is not None:
                values[name] = bool(value)
        return EciesOptions(**values)


@dataclass(frozen=True)
class DerivedKeys:
    """AES-256 encryption key and HMAC-SHA256 key derived from one shared secret."""

    enc_key: bytes
    mac_key: bytes

    def __repr__(self) -> str:
        # Never print key material
        return f"DerivedKeys(enc_key=<{len(self.enc_key)} bytes>, mac_key=<{len(self.mac_key)} bytes>)"
