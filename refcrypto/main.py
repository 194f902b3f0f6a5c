"""
refcrypto - Command Line Entry Point

Hash or encrypt text with the reference implementations in core_crypto.

Usage:
    refcrypto sha3 -a 512 abc
    refcrypto sha3 --keccak --out hex-w abc
    refcrypto sha256 --hex-bytes 616263
    refcrypto aes-encrypt -p secret -b 256 "big secret"
    refcrypto tea-decrypt -p secret <ciphertext>

With no message argument, the message is read from stdin.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .core_crypto import aes_ctr, sha1, sha256, sha3, sha512, tea_block
from .core_crypto.formats import HashOptions


logger = logging.getLogger(__name__)

SHA3_FUNCTIONS = {
    224: sha3.hash224,
    256: sha3.hash256,
    384: sha3.hash384,
    512: sha3.hash512,
}

SHA2_FUNCTIONS = {
    'sha1': sha1.hash,
    'sha256': sha256.hash,
    'sha512': sha512.hash,
}


def _add_message_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("message", nargs="?", help="Message (read from stdin when omitted)")
    parser.add_argument("--hex-bytes", action="store_true",
                        help="Message is given as hex pairs (e.g. NIST test vectors)")
    parser.add_argument("--out", choices=["hex", "hex-b", "hex-w"], default="hex",
                        help="Output grouping (default: contiguous hex)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="refcrypto",
        description="Reference implementations of SHA-1/2/3, AES-CTR and XXTEA",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    sha3_parser = commands.add_parser("sha3", help="SHA-3 / Keccak digest")
    sha3_parser.add_argument("-a", "--algorithm", type=int, choices=sorted(SHA3_FUNCTIONS),
                             default=256, help="Digest size in bits (default: 256)")
    sha3_parser.add_argument("--keccak", action="store_true",
                             help="Use original Keccak padding instead of SHA-3")
    _add_message_arguments(sha3_parser)

    for name in SHA2_FUNCTIONS:
        _add_message_arguments(commands.add_parser(name, help=f"{name.upper()} digest"))

    for name in ("aes-encrypt", "aes-decrypt"):
        aes_parser = commands.add_parser(name, help="AES counter mode, base64 ciphertext")
        aes_parser.add_argument("-p", "--password", required=True)
        aes_parser.add_argument("-b", "--bits", type=int, choices=aes_ctr.KEY_SIZES, default=256)
        aes_parser.add_argument("message", nargs="?")

    for name in ("tea-encrypt", "tea-decrypt"):
        tea_parser = commands.add_parser(name, help="Block TEA (XXTEA), base64 ciphertext")
        tea_parser.add_argument("-p", "--password", required=True)
        tea_parser.add_argument("message", nargs="?")

    return parser


def _read_message(parser: argparse.ArgumentParser, args: argparse.Namespace) -> str:
    if args.message is not None:
        return args.message
    if sys.stdin.isatty():
        parser.error("no message given and nothing on stdin")
    return sys.stdin.read()


def run(args: argparse.Namespace, message: str) -> str:
    """Execute a parsed command and return its output text."""
    if args.command in ("aes-encrypt", "aes-decrypt"):
        if args.command == "aes-encrypt":
            return aes_ctr.encrypt(message, args.password, args.bits)
        return aes_ctr.decrypt(message.strip(), args.password, args.bits)

    if args.command in ("tea-encrypt", "tea-decrypt"):
        if args.command == "tea-encrypt":
            return tea_block.encrypt(message, args.password)
        return tea_block.decrypt(message.strip(), args.password)

    options = HashOptions(
        padding="keccak" if getattr(args, "keccak", False) else "sha-3",
        msg_format="hex-bytes" if args.hex_bytes else "string",
        out_format=args.out,
    )
    if args.command == "sha3":
        return SHA3_FUNCTIONS[args.algorithm](message, options)
    return SHA2_FUNCTIONS[args.command](message, options)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for refcrypto."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    message = _read_message(parser, args)
    try:
        output = run(args, message)
    except ValueError as e:
        logger.debug("Command %s rejected input", args.command, exc_info=True)
        print(f"refcrypto: error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
