"""
ECIES command line tool

Genera chiavi secp256k1, cifra e decifra frame ECIES in esadecimale.

Usage:
    ecies-mue keygen [--uncompressed]
    ecies-mue pubkey --private HEX [--uncompressed]
    ecies-mue encrypt --private HEX --public HEX (--message TEXT | --hex HEX) [--no-key] [--short-tag]
    ecies-mue decrypt --private HEX [--public HEX] --frame HEX [--no-key] [--short-tag] [--text]

Author: ecies-mue Project
Date: October 2026
"""

import argparse
import logging
import sys

from ecies_mue import __version__
from ecies_mue.core.keys import PrivateKey
from ecies_mue.core.types import EciesOptions
from ecies_mue.exceptions import ECIESError
from ecies_mue.security.ecies import EciesCodec
from ecies_mue.utils.logger import EciesLogger


def _hex_bytes(value: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hex string: {value!r}")


def _add_option_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--no-key", action="store_true", help="Frame senza chiave pubblica del mittente")
    parser.add_argument("--short-tag", action="store_true", help="Tag di autenticazione troncato a 4 bytes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecies-mue",
        description="ECIES (secp256k1, AES-256-CBC, HMAC-SHA256) encrypt/decrypt tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Genera una chiave privata (hex) e la relativa chiave pubblica
  ecies-mue keygen

  # Cifra un messaggio per Bob
  ecies-mue encrypt --private <alice_hex> --public <bob_pub_hex> --message "hello"

  # Decifra (la chiave del mittente viaggia nel frame)
  ecies-mue decrypt --private <bob_hex> --frame <frame_hex> --text
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log di debug su stderr")

    subparsers = parser.add_subparsers(dest="command", required=True)

    keygen = subparsers.add_parser("keygen", help="Genera una nuova chiave privata")
    keygen.add_argument("--uncompressed", action="store_true", help="Chiave pubblica non compressa (65 bytes)")

    pubkey = subparsers.add_parser("pubkey", help="Chiave pubblica di una chiave privata")
    pubkey.add_argument("--private", required=True, help="Chiave privata (hex, 32 bytes)")
    pubkey.add_argument("--uncompressed", action="store_true", help="Chiave pubblica non compressa (65 bytes)")

    encrypt = subparsers.add_parser("encrypt", help="Cifra un messaggio")
    encrypt.add_argument("--private", required=True, help="Chiave privata del mittente (hex)")
    encrypt.add_argument("--uncompressed", action="store_true", help="Incorpora la chiave del mittente non compressa")
    encrypt.add_argument("--public", required=True, help="Chiave pubblica del destinatario (hex)")
    message = encrypt.add_mutually_exclusive_group(required=True)
    message.add_argument("--message", help="Messaggio testuale (UTF-8)")
    message.add_argument("--hex", type=_hex_bytes, help="Messaggio binario (hex)")
    _add_option_flags(encrypt)

    decrypt = subparsers.add_parser("decrypt", help="Decifra un frame")
    decrypt.add_argument("--private", required=True, help="Chiave privata del destinatario (hex)")
    decrypt.add_argument("--public", help="Chiave pubblica del mittente (hex, richiesta con --no-key)")
    decrypt.add_argument("--frame", required=True, type=_hex_bytes, help="Frame cifrato (hex)")
    decrypt.add_argument("--text", action="store_true", help="Stampa il plaintext come testo UTF-8")
    _add_option_flags(decrypt)

    return parser


def run(args: argparse.Namespace) -> int:
    level = logging.DEBUG if args.verbose else logging.WARNING
    logger = EciesLogger.get_logger("ECIES_CLI", level=level)
    EciesLogger.set_level("ECIES_CLI", level)

    if args.command == "keygen":
        key = PrivateKey.generate(compressed=not args.uncompressed)
        print(f"private: {key.to_hex()}")
        print(f"public:  {key.public_key.to_hex()}")
        return 0

    key = PrivateKey.from_hex(args.private, compressed=not getattr(args, "uncompressed", False))

    if args.command == "pubkey":
        print(key.public_key.to_hex())
        return 0

    codec = EciesCodec(
        private_key=key,
        public_key=args.public or None,
        options=EciesOptions(no_key=args.no_key, short_tag=args.short_tag),
        logger=logger,
    )

    if args.command == "encrypt":
        plaintext = args.hex if args.hex is not None else args.message
        print(codec.encrypt(plaintext).hex())
        return 0

    plaintext = codec.decrypt(args.frame)
    if args.text:
        print(plaintext.decode("utf-8", errors="replace"))
    else:
        print(plaintext.hex())
    if codec.recovered_public_key is not None:
        logger.info(f"Sender public key: {codec.recovered_public_key.to_hex()}")
    return 0


def main(argv=None) -> int:
    """Entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return run(args)
    except ECIESError as e:
        print(f"❌ {type(e).__name__}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
