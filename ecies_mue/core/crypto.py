"""
ECIES Cryptographic Operations

Thin layer over the `cryptography` primitives used by the codec:
- ECDH shared secret computation (secp256k1)
- HMAC-SHA512 key derivation into (enc_key, mac_key)
- AES-256-CBC encryption/decryption with PKCS#7 padding
- HMAC-SHA256 authentication tags and constant-time comparison
- IV generation

Standards Reference:
- SEC 1 v2.0 Section 3.3.1 - Elliptic Curve Diffie-Hellman Primitive
- RFC 2104 - HMAC
- NIST SP 800-38A - CBC mode

Author: ecies-mue Project
Date: October 2026
"""

import os

from cryptography.hazmat.primitives import constant_time, hashes, hmac
from cryptography.hazmat.primitives import padding as sym_padding
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ec import (
    EllipticCurvePrivateKey,
    EllipticCurvePublicKey,
)
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ecies_mue.config.ecies_config import ECIES_CONSTANTS
from ecies_mue.core.types import DerivedKeys


# ============================================================================
# ECDH OPERATIONS (SEC 1 Section 3.3.1)
# ============================================================================


def compute_ecdh_shared_secret(
    private_key: EllipticCurvePrivateKey,
    public_key: EllipticCurvePublicKey
) -> bytes:
    """
    Compute the ECDH shared secret.

    The secret is the x-coordinate of d * Q, big-endian and zero-padded to
    the field size (32 bytes on secp256k1). Both parties obtain the same
    bytes: d_A * Q_B == d_B * Q_A.

    Args:
        private_key: Local private key
        public_key: Peer public key

    Returns:
        bytes: Shared secret (32 bytes)

    Raises:
        ValueError: If the keys are on different curves or the exchange fails
    """
    try:
        return private_key.exchange(ec.ECDH(), public_key)
    except Exception as e:
        raise ValueError(f"Failed to compute ECDH shared secret: {e}")


# ============================================================================
# KEY DERIVATION (HMAC-SHA512)
# ============================================================================


def derive_keys_hmac_sha512(shared_secret: bytes, label: bytes = ECIES_CONSTANTS.KDF_LABEL) -> DerivedKeys:
    """
    Expand a shared secret into an AES-256 key and an HMAC-SHA256 key.

    digest = HMAC-SHA512(key=label, msg=shared_secret)
    enc_key = digest[0:32], mac_key = digest[32:64]

    Args:
        shared_secret: ECDH output
        label: HMAC key acting as a fixed personalization string

    Returns:
        DerivedKeys

    Raises:
        ValueError: If the shared secret is empty
    """
    if not shared_secret:
        raise ValueError("Shared secret cannot be empty")

    h = hmac.HMAC(label, hashes.SHA512())
    h.update(shared_secret)
    digest = h.finalize()

    enc_size = ECIES_CONSTANTS.ENC_KEY_SIZE
    return DerivedKeys(
        enc_key=digest[:enc_size],
        mac_key=digest[enc_size:enc_size + ECIES_CONSTANTS.MAC_KEY_SIZE],
    )


# ============================================================================
# AUTHENTICATION (HMAC-SHA256)
# ============================================================================


def hmac_sha256(key: bytes, data: bytes) -> bytes:
    """HMAC-SHA256 of data (32 bytes)."""
    h = hmac.HMAC(key, hashes.SHA256())
    h.update(data)
    return h.finalize()


def compute_tag(mac_key: bytes, payload: bytes, tag_length: int) -> bytes:
    """
    Authentication tag over the pre-tag payload, truncated to tag_length.

    Args:
        mac_key: 32-byte MAC key from the KDF
        payload: [sender key] || IV || ciphertext body
        tag_length: 32 (full) or 4 (short tag)
    """
    if tag_length < 1 or tag_length > ECIES_CONSTANTS.FULL_TAG_SIZE:
        raise ValueError(f"Invalid tag length: {tag_length}")
    return hmac_sha256(mac_key, payload)[:tag_length]


def tags_equal(expected: bytes, received: bytes) -> bool:
    """Constant-time tag comparison."""
    return constant_time.bytes_eq(bytes(expected), bytes(received))


# ============================================================================
# INITIALIZATION VECTORS
# ============================================================================


def generate_iv() -> bytes:
    """Fresh random IV for AES-CBC (16 bytes)."""
    return os.urandom(ECIES_CONSTANTS.IV_SIZE)


def derive_deterministic_iv(private_key_bytes: bytes, message: bytes) -> bytes:
    """
    IV = HMAC-SHA256(key=private scalar, msg=message)[0:16]

    The same sender and message always give the same IV, hence the same
    frame.
    """
    return hmac_sha256(private_key_bytes, message)[:ECIES_CONSTANTS.IV_SIZE]


# ============================================================================
# AES-256-CBC (NIST SP 800-38A)
# ============================================================================


def aes256_cbc_encrypt(key: bytes, iv: bytes, plaintext: bytes) -> bytes:
    """
    Encrypt with AES-256-CBC and PKCS#7 padding.

    Output length is the smallest multiple of 16 strictly greater than
    len(plaintext).
    """
    padder = sym_padding.PKCS7(algorithms.AES.block_size).padder()
    padded_data = padder.update(plaintext) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    return encryptor.update(padded_data) + encryptor.finalize()


def aes256_cbc_decrypt(key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    """
    Decrypt AES-256-CBC and strip PKCS#7 padding.

    Raises:
        ValueError: If the ciphertext length or padding is invalid
    """
    if not ciphertext or len(ciphertext) % ECIES_CONSTANTS.BLOCK_SIZE:
        raise ValueError(f"Invalid ciphertext length: {len(ciphertext)} bytes")

    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded_plaintext = decryptor.update(ciphertext) + decryptor.finalize()

    unpadder = sym_padding.PKCS7(algorithms.AES.block_size).unpadder()
    return unpadder.update(padded_plaintext) + unpadder.finalize()
