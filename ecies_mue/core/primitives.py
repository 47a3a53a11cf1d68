"""
ECIES Encoding Primitives

Public key point encoding/decoding (SEC 1 v2.0 Section 2.3.3 / 2.3.4) and
parsing of the optional sender key field that opens a ciphertext frame.

Author: ecies-mue Project
Date: October 2026
"""

from typing import Tuple

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePublicKey

from ecies_mue.core.types import (
    KeyEncoding,
    curve,
)
from ecies_mue.exceptions import FormatError


# ============================================================================
# PUBLIC KEY ENCODING (SEC 1 Section 2.3.3)
# ============================================================================


def encode_public_key(public_key: EllipticCurvePublicKey, encoding: KeyEncoding) -> bytes:
    """
    Encode a secp256k1 public key as an X9.62 point.

    Compressed format:   prefix (0x02 even y / 0x03 odd y) || x  (33 bytes)
    Uncompressed format: 0x04 || x || y                           (65 bytes)

    Args:
        public_key: EllipticCurvePublicKey (SECP256K1)
        encoding: KeyEncoding.COMPRESSED or KeyEncoding.UNCOMPRESSED

    Returns:
        bytes: Encoded point

    Raises:
        ValueError: If the key is not on secp256k1
    """
    if not isinstance(public_key.curve, ec.SECP256K1):
        raise ValueError(f"Only secp256k1 is supported, got {type(public_key.curve).__name__}")

    if encoding is KeyEncoding.COMPRESSED:
        point_format = serialization.PublicFormat.CompressedPoint
    else:
        point_format = serialization.PublicFormat.UncompressedPoint

    return public_key.public_bytes(
        encoding=serialization.Encoding.X962,
        format=point_format,
    )


def decode_public_key(encoded_point: bytes) -> Tuple[EllipticCurvePublicKey, KeyEncoding]:
    """
    Decode an X9.62 encoded secp256k1 point.

    The encoding is recognized from the leading byte and must match the
    total length exactly.

    Args:
        encoded_point: 33-byte compressed or 65-byte uncompressed point

    Returns:
        (public_key, encoding)

    Raises:
        FormatError: If the bytes are not a valid secp256k1 point
    """
    if not encoded_point:
        raise FormatError("Empty public key encoding")

    encoding = parse_key_encoding(encoded_point)
    if len(encoded_point) != encoding.size:
        raise FormatError(
            f"Invalid {encoding.value} public key length: {len(encoded_point)} bytes "
            f"(expected {encoding.size})"
        )

    try:
        public_key = ec.EllipticCurvePublicKey.from_encoded_point(curve(), bytes(encoded_point))
    except ValueError as e:
        raise FormatError(f"Invalid public key point: {e}") from e

    return public_key, encoding


# ============================================================================
# FRAME KEY FIELD
# ============================================================================


def parse_key_encoding(data: bytes) -> KeyEncoding:
    """
    Recognize the encoding of a public key field from its leading byte.

    Raises:
        FormatError: If data is empty or the prefix is unknown
    """
    if not data:
        raise FormatError("Frame too short: missing public key field")
    try:
        return KeyEncoding.from_prefix(data[0])
    except ValueError as e:
        raise FormatError(str(e)) from e


def parse_public_key_field(frame: bytes) -> Tuple[EllipticCurvePublicKey, KeyEncoding, bytes]:
    """
    Parse the sender public key that opens a frame.

    Args:
        frame: Complete ciphertext frame

    Returns:
        (public_key, encoding, field_bytes) where field_bytes are the raw
        bytes of the key field as they appear in the frame

    Raises:
        FormatError: If the field is truncated or not a valid point
    """
    encoding = parse_key_encoding(frame)
    if len(frame) < encoding.size:
        raise FormatError(
            f"Frame too short for {encoding.value} public key: {len(frame)} bytes"
        )

    field_bytes = bytes(frame[:encoding.size])
    public_key, _ = decode_public_key(field_bytes)
    return public_key, encoding, field_bytes

