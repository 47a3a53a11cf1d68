"""
secp256k1 Key Wrappers

cryptography's EC key objects do not remember how a public key is meant
to be serialized. PrivateKey and PublicKey carry that choice (compressed
or uncompressed point) so that the sender key embedded in a frame uses
the same encoding the key owner publishes.

Author: ecies-mue Project
Date: October 2026
"""

from typing import Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ec import (
    EllipticCurvePrivateKey,
    EllipticCurvePublicKey,
)

from ecies_mue.core.primitives import decode_public_key, encode_public_key
from ecies_mue.core.types import COORDINATE_SIZE, SECP256K1_ORDER, KeyEncoding, curve
from ecies_mue.exceptions import FormatError, MissingKeyError


class PublicKey:
    """
    secp256k1 public key plus its preferred point encoding.

    Example:
        >>> key = PrivateKey.generate().public_key
        >>> PublicKey.from_bytes(key.to_bytes()) == key
        True
    """

    def __init__(self, key: EllipticCurvePublicKey, compressed: bool = True):
        if not isinstance(key, EllipticCurvePublicKey):
            raise FormatError(f"Invalid public key: expected EllipticCurvePublicKey, got {type(key).__name__}")
        if not isinstance(key.curve, ec.SECP256K1):
            raise FormatError(f"Invalid public key: only secp256k1 is supported, got {type(key.curve).__name__}")
        self._key = key
        self._compressed = bool(compressed)

    @classmethod
    def from_bytes(cls, data: bytes) -> "PublicKey":
        """
        Parse a 33-byte compressed or 65-byte uncompressed point.

        Raises:
            FormatError: If data is not a valid secp256k1 point
        """
        key, encoding = decode_public_key(data)
        return cls(key, compressed=encoding is KeyEncoding.COMPRESSED)

    @classmethod
    def from_hex(cls, hex_string: str) -> "PublicKey":
        try:
            data = bytes.fromhex(hex_string)
        except ValueError as e:
            raise FormatError(f"Invalid public key hex: {e}") from e
        return cls.from_bytes(data)

    @property
    def key(self) -> EllipticCurvePublicKey:
        return self._key

    @property
    def compressed(self) -> bool:
        return self._compressed

    @property
    def encoding(self) -> KeyEncoding:
        return KeyEncoding.from_compressed_flag(self._compressed)

    def to_bytes(self) -> bytes:
        """Point encoding (33 or 65 bytes) as carried in a frame."""
        return encode_public_key(self._key, self.encoding)

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def to_der(self) -> bytes:
        """SubjectPublicKeyInfo DER encoding."""
        return self._key.public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    def with_encoding(self, compressed: bool) -> "PublicKey":
        return PublicKey(self._key, compressed=compressed)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        return f"PublicKey({self.to_hex()})"


class PrivateKey:
    """
    secp256k1 private key plus the encoding of its public key.

    Example:
        >>> alice = PrivateKey.from_hex("1fa76f9c799ca3a51e2c7c901d3ba8e24f6d870beccf8df56faf30120b38f360")
        >>> len(alice.public_key.to_bytes())
        33
    """

    def __init__(self, key: EllipticCurvePrivateKey, compressed: bool = True):
        if not isinstance(key, EllipticCurvePrivateKey):
            raise MissingKeyError(f"Invalid private key: expected EllipticCurvePrivateKey, got {type(key).__name__}")
        if not isinstance(key.curve, ec.SECP256K1):
            raise MissingKeyError(f"Invalid private key: only secp256k1 is supported, got {type(key.curve).__name__}")
        self._key = key
        self._compressed = bool(compressed)

    @classmethod
    def generate(cls, compressed: bool = True) -> "PrivateKey":
        return cls(ec.generate_private_key(curve()), compressed=compressed)

    @classmethod
    def from_int(cls, value: int, compressed: bool = True) -> "PrivateKey":
        """
        Build a key from its scalar.

        Raises:
            MissingKeyError: If value is outside [1, n-1]
        """
        if not isinstance(value, int) or isinstance(value, bool):
            raise MissingKeyError(f"Invalid private key scalar type: {type(value).__name__}")
        if not 1 <= value < SECP256K1_ORDER:
            raise MissingKeyError("Invalid private key: scalar out of range")
        return cls(ec.derive_private_key(value, curve()), compressed=compressed)

    @classmethod
    def from_bytes(cls, data: bytes, compressed: bool = True) -> "PrivateKey":
        if len(data) != COORDINATE_SIZE:
            raise MissingKeyError(
                f"Invalid private key length: {len(data)} bytes (expected {COORDINATE_SIZE})"
            )
        return cls.from_int(int.from_bytes(data, byteorder="big"), compressed=compressed)

    @classmethod
    def from_hex(cls, hex_string: str, compressed: bool = True) -> "PrivateKey":
        """
        Parse a 64-digit hex scalar (no 0x prefix).

        Raises:
            MissingKeyError: If the string is not exactly 32 bytes of hex
        """
        try:
            data = bytes.fromhex(hex_string)
        except (TypeError, ValueError) as e:
            raise MissingKeyError(f"Invalid private key hex: {e}") from e
        return cls.from_bytes(data, compressed=compressed)

    @property
    def key(self) -> EllipticCurvePrivateKey:
        return self._key

    @property
    def compressed(self) -> bool:
        return self._compressed

    @property
    def public_key(self) -> PublicKey:
        return PublicKey(self._key.public_key(), compressed=self._compressed)

    def to_int(self) -> int:
        return self._key.private_numbers().private_value

    def to_bytes(self) -> bytes:
        """32-byte big-endian scalar."""
        return self.to_int().to_bytes(COORDINATE_SIZE, byteorder="big")

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def __repr__(self) -> str:
        # Never print the scalar
        return f"PrivateKey(public_key={self.public_key.to_hex()})"


def coerce_private_key(key: Union[PrivateKey, EllipticCurvePrivateKey, None]) -> PrivateKey:
    """
    Normalize the accepted private key inputs.

    Raises:
        MissingKeyError: If key is None, empty or not a usable private key
    """
    if key is None or (isinstance(key, (bytes, bytearray, str)) and not key):
        raise MissingKeyError("no private key provided")
    if isinstance(key, PrivateKey):
        return key
    if isinstance(key, EllipticCurvePrivateKey):
        return PrivateKey(key)
    if isinstance(key, (bytes, bytearray)):
        return PrivateKey.from_bytes(bytes(key))
    if isinstance(key, str):
        return PrivateKey.from_hex(key)
    raise MissingKeyError(f"Invalid private key: unsupported type {type(key).__name__}")


def coerce_public_key(key: Union[PublicKey, EllipticCurvePublicKey, bytes, None]) -> PublicKey:
    """
    Normalize the accepted public key inputs.

    Raises:
        MissingKeyError: If key is None or empty
        FormatError: If key is not a valid secp256k1 public key
    """
    if key is None or (isinstance(key, (bytes, bytearray, str)) and not key):
        raise MissingKeyError("no public key provided")
    if isinstance(key, PublicKey):
        return key
    if isinstance(key, EllipticCurvePublicKey):
        return PublicKey(key)
    if isinstance(key, (bytes, bytearray)):
        return PublicKey.from_bytes(bytes(key))
    if isinstance(key, str):
        return PublicKey.from_hex(key)
    raise FormatError(f"Invalid public key: unsupported type {type(key).__name__}")
