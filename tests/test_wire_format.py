"""
Test suite per il formato dei frame (vettori di riferimento)

Il frame atteso viene ricostruito senza passare dal codec:
- Aritmetica secp256k1 in puro Python (chiavi pubbliche, coordinata x di ECDH)
- HMAC-SHA512 con l'etichetta letterale b"ecies-mue"
- Padding PKCS#7 a mano, AES-256-CBC grezzo
- Tag HMAC-SHA256 su chiave || IV || corpo

Qualsiasi modifica a etichetta KDF, segreto condiviso, layout o tag rompe
questi test.
"""

import hashlib
import hmac as std_hmac

import pytest
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ecies_mue import EciesCodec, EciesOptions, PrivateKey

from conftest import ALICE_SCALAR_HEX, BOB_SCALAR_HEX, MESSAGE


# ============================================================================
# secp256k1 di riferimento
# ============================================================================

_P = 2 ** 256 - 2 ** 32 - 977
_G = (
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)

ALICE_SCALAR = int(ALICE_SCALAR_HEX, 16)
BOB_SCALAR = int(BOB_SCALAR_HEX, 16)
FIXED_IV = bytes.fromhex("000102030405060708090a0b0c0d0e0f")


def _point_add(a, b):
    if a is None:
        return b
    if b is None:
        return a
    if a[0] == b[0] and (a[1] + b[1]) % _P == 0:
        return None
    if a == b:
        lam = 3 * a[0] * a[0] * pow(2 * a[1], _P - 2, _P) % _P
    else:
        lam = (b[1] - a[1]) * pow(b[0] - a[0], _P - 2, _P) % _P
    x = (lam * lam - a[0] - b[0]) % _P
    return x, (lam * (a[0] - x) - a[1]) % _P


def _scalar_mult(k, point):
    result = None
    while k:
        if k & 1:
            result = _point_add(result, point)
        point = _point_add(point, point)
        k >>= 1
    return result


def _encode_point(point, compressed=True):
    x = point[0].to_bytes(32, "big")
    if compressed:
        return bytes([2 + (point[1] & 1)]) + x
    return b"\x04" + x + point[1].to_bytes(32, "big")


def _reference_frame(sender, recipient, plaintext, iv, no_key=False, short_tag=False, compressed=True):
    shared_x = _scalar_mult(sender, _scalar_mult(recipient, _G))[0].to_bytes(32, "big")
    digest = std_hmac.new(b"ecies-mue", shared_x, hashlib.sha512).digest()
    enc_key, mac_key = digest[:32], digest[32:]

    pad = 16 - len(plaintext) % 16
    encryptor = Cipher(algorithms.AES(enc_key), modes.CBC(iv)).encryptor()
    body = encryptor.update(plaintext + bytes([pad]) * pad) + encryptor.finalize()

    key_field = b"" if no_key else _encode_point(_scalar_mult(sender, _G), compressed)
    payload = key_field + iv + body
    tag = std_hmac.new(mac_key, payload, hashlib.sha256).digest()
    return payload + tag[:4 if short_tag else 32]


class TestReferenceKeys:

    def test_public_keys_match_reference_points(self, alice_key, bob_key):
        assert alice_key.public_key.to_bytes() == _encode_point(_scalar_mult(ALICE_SCALAR, _G))
        assert bob_key.public_key.to_bytes() == _encode_point(_scalar_mult(BOB_SCALAR, _G))

    def test_uncompressed_public_key_matches_reference_point(self):
        key = PrivateKey.from_hex(ALICE_SCALAR_HEX, compressed=False)
        assert key.public_key.to_bytes() == _encode_point(_scalar_mult(ALICE_SCALAR, _G), compressed=False)

    def test_derived_keys_match_reference_kdf(self, alice):
        shared_x = _scalar_mult(ALICE_SCALAR, _scalar_mult(BOB_SCALAR, _G))[0].to_bytes(32, "big")
        digest = std_hmac.new(b"ecies-mue", shared_x, hashlib.sha512).digest()

        keys = alice.derive_keys()

        assert keys.enc_key == digest[:32]
        assert keys.mac_key == digest[32:]


class TestWireFormat:

    @pytest.mark.parametrize("no_key,short_tag", [
        (False, False),
        (True, False),
        (False, True),
        (True, True),
    ])
    def test_encrypt_matches_reference_frame(self, alice, no_key, short_tag):
        frame = alice.encrypt(MESSAGE, iv=FIXED_IV, options=EciesOptions(no_key=no_key, short_tag=short_tag))

        expected = _reference_frame(ALICE_SCALAR, BOB_SCALAR, MESSAGE, FIXED_IV, no_key, short_tag)
        assert frame.hex() == expected.hex()

    def test_uncompressed_sender_matches_reference_frame(self, bob_key):
        sender = PrivateKey.from_hex(ALICE_SCALAR_HEX, compressed=False)
        frame = EciesCodec(private_key=sender, public_key=bob_key.public_key).encrypt(MESSAGE, iv=FIXED_IV)

        expected = _reference_frame(ALICE_SCALAR, BOB_SCALAR, MESSAGE, FIXED_IV, compressed=False)
        assert frame == expected

    def test_empty_message_matches_reference_frame(self, alice):
        frame = alice.encrypt(b"", iv=FIXED_IV)
        assert frame == _reference_frame(ALICE_SCALAR, BOB_SCALAR, b"", FIXED_IV)

    def test_deterministic_iv_matches_reference(self, alice):
        iv = std_hmac.new(bytes.fromhex(ALICE_SCALAR_HEX), MESSAGE, hashlib.sha256).digest()[:16]

        frame = alice.with_options(deterministic_iv=True).encrypt(MESSAGE)

        assert frame == _reference_frame(ALICE_SCALAR, BOB_SCALAR, MESSAGE, iv)

    def test_decrypts_reference_frame(self, bob_key):
        frame = _reference_frame(ALICE_SCALAR, BOB_SCALAR, MESSAGE, FIXED_IV)
        codec = EciesCodec().with_private_key(bob_key)

        assert codec.decrypt(frame) == MESSAGE
        assert codec.recovered_public_key.to_bytes() == frame[:33]

    def test_decrypts_reference_frame_no_key_short_tag(self, bob):
        frame = _reference_frame(ALICE_SCALAR, BOB_SCALAR, MESSAGE, FIXED_IV, no_key=True, short_tag=True)
        assert len(frame) == 16 + 32 + 4
        assert bob.with_options(True, True).decrypt(frame) == MESSAGE
