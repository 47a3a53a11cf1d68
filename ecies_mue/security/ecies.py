"""
ECIES (Elliptic Curve Integrated Encryption Scheme) Codec.

Hybrid public-key encryption between two secp256k1 key holders:

Encryption Flow:
1. ECDH key agreement: S = d_local * Q_peer, secret = x(S) (32 bytes)
2. Key derivation: HMAC-SHA512(label, secret) -> enc_key (32) || mac_key (32)
3. AES-256-CBC encryption of the message (PKCS#7 padding)
4. HMAC-SHA256 tag over [sender public key] || IV || ciphertext body

Output Format:
    sender_public_key (33/65 bytes, omitted with no_key) || iv (16 bytes)
    || ciphertext (n * 16 bytes) || tag (32 bytes, 4 with short_tag)

Decryption always verifies the tag (constant time) before touching the
ciphertext; any failure is reported as an exception, never as partial
plaintext.
"""

from typing import Optional, Union

from ecies_mue.config.ecies_config import ECIES_CONSTANTS, get_default_options
from ecies_mue.core.crypto import (
    aes256_cbc_decrypt,
    aes256_cbc_encrypt,
    compute_ecdh_shared_secret,
    compute_tag,
    derive_deterministic_iv,
    derive_keys_hmac_sha512,
    generate_iv,
    tags_equal,
)
from ecies_mue.core.keys import PrivateKey, PublicKey, coerce_private_key, coerce_public_key
from ecies_mue.core.primitives import parse_public_key_field
from ecies_mue.core.types import DerivedKeys, EciesOptions, KeyEncoding
from ecies_mue.exceptions import ConfigurationError, FormatError, IntegrityError
from ecies_mue.utils.logger import EciesLogger


Message = Union[bytes, bytearray, memoryview, str]


def _message_bytes(message: Message) -> bytes:
    if isinstance(message, str):
        return message.encode("utf-8")
    if isinstance(message, (bytes, bytearray, memoryview)):
        return bytes(message)
    raise TypeError(f"Message must be bytes or str, got {type(message).__name__}")


class EciesCodec:
    """
    ECIES encrypt/decrypt bound to a local private key and a peer public key.

    Configuration methods return the codec itself, so a codec can be built
    in one expression:

        >>> alice = PrivateKey.generate()
        >>> bob = PrivateKey.generate()
        >>> frame = EciesCodec().with_private_key(alice).with_public_key(bob.public_key).encrypt(b"hi")
        >>> EciesCodec().with_private_key(bob).decrypt(frame)
        b'hi'

    Options are an immutable EciesOptions value: with_options() swaps the
    whole value, and encrypt()/decrypt() accept a per-call override that
    leaves the codec untouched.
    """

    def __init__(
        self,
        private_key=None,
        public_key=None,
        options: Optional[EciesOptions] = None,
        logger=None,
    ):
        self._private_key: Optional[PrivateKey] = None
        self._public_key: Optional[PublicKey] = None
        self._recovered_public_key: Optional[PublicKey] = None
        self._options = options if options is not None else get_default_options()

        self.logger = logger or EciesLogger.get_logger(
            name=ECIES_CONSTANTS.LOGGER_NAME,
            console_output=False,
        )

        if private_key is not None:
            self.with_private_key(private_key)
        if public_key is not None:
            self.with_public_key(public_key)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def with_private_key(self, key=None) -> "EciesCodec":
        """
        Set the local private key.

        Args:
            key: PrivateKey, EllipticCurvePrivateKey, 32 raw bytes or hex string

        Raises:
            MissingKeyError: If key is missing or not a valid private key
        """
        self._private_key = coerce_private_key(key)
        self.logger.debug(
            f"Private key configured ({self._private_key.public_key.encoding.value} public key)"
        )
        return self

    def with_public_key(self, key=None) -> "EciesCodec":
        """
        Set the peer public key.

        Args:
            key: PublicKey, EllipticCurvePublicKey, encoded point bytes or hex string

        Raises:
            MissingKeyError: If key is missing
            FormatError: If key is not a valid secp256k1 public key
        """
        self._public_key = coerce_public_key(key)
        self.logger.debug(f"Peer public key configured: {self._public_key.to_hex()[:16]}...")
        return self

    def with_options(
        self,
        no_key: Optional[bool] = None,
        short_tag: Optional[bool] = None,
        deterministic_iv: Optional[bool] = None,
        *,
        options: Optional[EciesOptions] = None,
    ) -> "EciesCodec":
        """
        Replace the codec options.

        Flags left as None keep their current value. A complete EciesOptions
        value can be passed as options=, individual flags then override it.

            >>> codec = EciesCodec().with_options(True, True)
            >>> codec.options.no_key, codec.options.short_tag
            (True, True)
        """
        for flag in (no_key, short_tag, deterministic_iv):
            if flag is not None and not isinstance(flag, bool):
                raise TypeError(f"Option flags must be bool or None, got {type(flag).__name__}")
        if options is not None:
            if not isinstance(options, EciesOptions):
                raise TypeError(f"Expected EciesOptions, got {type(options).__name__}")
            base = options
        else:
            base = self._options
        self._options = base.replace(
            no_key=no_key,
            short_tag=short_tag,
            deterministic_iv=deterministic_iv,
        )
        self.logger.debug(f"Options: {self._options}")
        return self

    set_private_key = with_private_key
    set_public_key = with_public_key
    set_options = with_options

    @property
    def private_key(self) -> Optional[PrivateKey]:
        return self._private_key

    @property
    def public_key(self) -> Optional[PublicKey]:
        return self._public_key

    @property
    def options(self) -> EciesOptions:
        return self._options

    @property
    def recovered_public_key(self) -> Optional[PublicKey]:
        """Sender key embedded in the last successfully decrypted frame."""
        return self._recovered_public_key

    # ------------------------------------------------------------------
    # Key agreement
    # ------------------------------------------------------------------

    def derive_keys(self, peer_public_key=None) -> DerivedKeys:
        """
        Derive (enc_key, mac_key) for the local private key and a peer key.

        Args:
            peer_public_key: Peer key to use instead of the configured one

        Raises:
            ConfigurationError: If the private key or the peer key is missing
        """
        private_key = self._require_private_key("derive keys")
        if peer_public_key is not None:
            peer = coerce_public_key(peer_public_key)
        elif self._public_key is not None:
            peer = self._public_key
        else:
            raise ConfigurationError("no public key configured: cannot derive keys")
        return self._derive(private_key, peer)

    @staticmethod
    def _derive(private_key: PrivateKey, peer: PublicKey) -> DerivedKeys:
        shared_secret = compute_ecdh_shared_secret(private_key.key, peer.key)
        keys = derive_keys_hmac_sha512(shared_secret)
        del shared_secret
        return keys

    def _require_private_key(self, operation: str) -> PrivateKey:
        if self._private_key is None:
            raise ConfigurationError(f"no private key configured: cannot {operation}")
        return self._private_key

    def _resolve_options(self, options: Optional[EciesOptions]) -> EciesOptions:
        if options is None:
            return self._options
        if not isinstance(options, EciesOptions):
            raise TypeError(f"Expected EciesOptions, got {type(options).__name__}")
        return options

    # ------------------------------------------------------------------
    # Encrypt
    # ------------------------------------------------------------------

    def encrypt(
        self,
        plaintext: Message,
        iv: Optional[bytes] = None,
        options: Optional[EciesOptions] = None,
    ) -> bytes:
        """
        Encrypt a message for the configured peer.

        Args:
            plaintext: Message bytes (str is encoded as UTF-8)
            iv: Explicit 16-byte IV (default: random, or deterministic if enabled)
            options: Options for this call only (default: codec options)

        Returns:
            bytes: Ciphertext frame

        Raises:
            ConfigurationError: If the private key or the peer key is missing
            ValueError: If iv is not 16 bytes
        """
        opts = self._resolve_options(options)
        message = _message_bytes(plaintext)

        private_key = self._require_private_key("encrypt")
        if self._public_key is None:
            raise ConfigurationError("no public key configured: cannot encrypt")

        if iv is None:
            if opts.deterministic_iv:
                iv = derive_deterministic_iv(private_key.to_bytes(), message)
            else:
                iv = generate_iv()
        elif len(iv) != ECIES_CONSTANTS.IV_SIZE:
            raise ValueError(f"Invalid IV length: {len(iv)} bytes (expected {ECIES_CONSTANTS.IV_SIZE})")

        keys = self._derive(private_key, self._public_key)
        body = aes256_cbc_encrypt(keys.enc_key, bytes(iv), message)

        key_field = b"" if opts.no_key else private_key.public_key.to_bytes()
        payload = key_field + bytes(iv) + body
        tag = compute_tag(keys.mac_key, payload, opts.tag_length)

        self.logger.debug(
            f"Encrypted {len(message)} bytes -> frame {len(payload) + len(tag)} bytes "
            f"(key field {len(key_field)}, body {len(body)}, tag {len(tag)})"
        )
        return payload + tag

    # ------------------------------------------------------------------
    # Decrypt
    # ------------------------------------------------------------------

    def decrypt(self, frame: bytes, options: Optional[EciesOptions] = None) -> bytes:
        """
        Verify and decrypt a ciphertext frame.

        With no_key disabled the sender key is read from the frame (and
        takes precedence over the configured peer key); with no_key enabled
        the configured peer key is used.

        Args:
            frame: Ciphertext frame produced by encrypt()
            options: Options for this call only (default: codec options)

        Returns:
            bytes: Plaintext

        Raises:
            ConfigurationError: If the private key (or, with no_key, the peer key) is missing
            FormatError: If the frame is too short or the embedded key is invalid
            IntegrityError: If the authentication tag does not match
        """
        opts = self._resolve_options(options)
        private_key = self._require_private_key("decrypt")
        if not isinstance(frame, (bytes, bytearray, memoryview)):
            raise TypeError(f"Frame must be bytes, got {type(frame).__name__}")
        data = bytes(frame)

        if opts.no_key:
            if self._public_key is None:
                raise ConfigurationError("no public key configured: cannot decrypt without embedded key")
            peer = self._public_key
            offset = 0
        else:
            peer_key, encoding, key_field = parse_public_key_field(data)
            peer = PublicKey(peer_key, compressed=encoding is KeyEncoding.COMPRESSED)
            offset = len(key_field)

        tag_length = opts.tag_length
        min_length = offset + ECIES_CONSTANTS.IV_SIZE + ECIES_CONSTANTS.BLOCK_SIZE + tag_length
        if len(data) < min_length:
            raise FormatError(f"Frame too short: {len(data)} bytes (minimum {min_length})")

        iv = data[offset:offset + ECIES_CONSTANTS.IV_SIZE]
        body = data[offset + ECIES_CONSTANTS.IV_SIZE:len(data) - tag_length]
        received_tag = data[len(data) - tag_length:]

        if len(body) % ECIES_CONSTANTS.BLOCK_SIZE:
            raise FormatError(f"Invalid ciphertext body length: {len(body)} bytes (not a multiple of 16)")

        keys = self._derive(private_key, peer)
        expected_tag = compute_tag(keys.mac_key, data[:len(data) - tag_length], tag_length)
        if not tags_equal(expected_tag, received_tag):
            self.logger.warning(f"Authentication tag mismatch on {len(data)}-byte frame: rejected")
            raise IntegrityError()

        try:
            plaintext = aes256_cbc_decrypt(keys.enc_key, iv, body)
        except ValueError:
            # Same error as a tag mismatch: no padding oracle
            self.logger.warning("Padding check failed after tag verification: rejected")
            raise IntegrityError() from None

        if not opts.no_key:
            self._recovered_public_key = peer
        self.logger.debug(f"Decrypted frame of {len(data)} bytes -> {len(plaintext)} bytes")
        return plaintext

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def frame_length(
        plaintext_length: int,
        options: Optional[EciesOptions] = None,
        key_encoding: KeyEncoding = KeyEncoding.COMPRESSED,
    ) -> int:
        """
        Exact frame size for a message of plaintext_length bytes.

        Example:
            >>> EciesCodec.frame_length(28)
            113
        """
        if plaintext_length < 0:
            raise ValueError(f"Invalid plaintext length: {plaintext_length}")
        opts = options if options is not None else get_default_options()
        block = ECIES_CONSTANTS.BLOCK_SIZE
        body_length = (plaintext_length // block + 1) * block
        key_length = 0 if opts.no_key else key_encoding.size
        return key_length + ECIES_CONSTANTS.IV_SIZE + body_length + opts.tag_length


# ============================================================================
# FUNCTIONAL INTERFACE
# ============================================================================


def ecies_encrypt(
    plaintext: Message,
    sender_private_key,
    recipient_public_key,
    no_key: bool = False,
    short_tag: bool = False,
) -> bytes:
    """
    Encrypt plaintext from sender_private_key to recipient_public_key.

    Example:
        >>> alice, bob = PrivateKey.generate(), PrivateKey.generate()
        >>> frame = ecies_encrypt(b"secret", alice, bob.public_key)
        >>> ecies_decrypt(frame, bob)
        b'secret'
    """
    codec = (
        EciesCodec(options=EciesOptions(no_key=no_key, short_tag=short_tag))
        .with_private_key(sender_private_key)
        .with_public_key(recipient_public_key)
    )
    return codec.encrypt(plaintext)


def ecies_decrypt(
    frame: bytes,
    recipient_private_key,
    sender_public_key=None,
    no_key: bool = False,
    short_tag: bool = False,
) -> bytes:
    """Decrypt a frame addressed to recipient_private_key."""
    codec = EciesCodec(
        public_key=sender_public_key,
        options=EciesOptions(no_key=no_key, short_tag=short_tag),
    ).with_private_key(recipient_private_key)
    return codec.decrypt(frame)
