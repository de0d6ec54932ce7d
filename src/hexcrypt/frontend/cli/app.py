"""
Command-line interface for hexcrypt.

    hexcrypt encrypt notes.txt notes.txt.enc --secret-env HEXCRYPT_SECRET
    hexcrypt decrypt notes.txt.enc notes.txt

The secret comes from --secret, from the environment variable named by
--secret-env (HEXCRYPT_SECRET by default), or from an interactive prompt.
A destination left behind by a failed run is not removed.
"""

from __future__ import annotations

import argparse
import getpass
import logging
import os
import sys
from typing import List, Optional

from ...core.engine import CryptoEngine
from ...core.exceptions import HexCryptError
from ...security.crypto import Direction
from ...security.stream import DEFAULT_CHUNK_SIZE
from .logging_config import configure_logging


logger = logging.getLogger(__name__)

SECRET_ENV = "HEXCRYPT_SECRET"

EXIT_OK = 0
EXIT_CRYPTO = 1
EXIT_IO = 3
EXIT_NO_SECRET = 4


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hexcrypt",
        description="Encrypt or decrypt a file with AES-128-CBC keyed by a hex secret.",
    )
    parser.add_argument(
        "direction",
        choices=[d.value for d in Direction],
        help="Whether to encrypt or decrypt SOURCE",
    )
    parser.add_argument("source", help="File to read")
    parser.add_argument("destination", help="File to create (overwritten if it exists)")
    secret = parser.add_mutually_exclusive_group()
    secret.add_argument(
        "--secret",
        default=None,
        help="Hex secret, at least 32 characters (visible in the process list)",
    )
    secret.add_argument(
        "--secret-env",
        default=SECRET_ENV,
        help=f"Environment variable holding the secret (default: {SECRET_ENV})",
    )
    parser.add_argument(
        "--chunk-size",
        type=_positive_int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Read buffer size in bytes (default: {DEFAULT_CHUNK_SIZE})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def resolve_secret(args: argparse.Namespace) -> str:
    """Pick the secret from the flag, then the environment, then a prompt."""
    if args.secret is not None:
        return args.secret
    from_env = os.environ.get(args.secret_env) if args.secret_env else None
    if from_env:
        return from_env
    return getpass.getpass("Secret: ")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        secret = resolve_secret(args)
    except (EOFError, KeyboardInterrupt):
        print("hexcrypt: error: no secret given", file=sys.stderr)
        return EXIT_NO_SECRET

    try:
        engine = CryptoEngine(
            secret,
            Direction(args.direction),
            chunk_size=args.chunk_size,
        )
        logger.debug("engine: %s", engine.describe())
        stats = engine.execute(args.source, args.destination)
    except HexCryptError as exc:
        logger.debug("%s failed: %s", args.direction, exc)
        print(f"hexcrypt: error: {exc}", file=sys.stderr)
        return EXIT_CRYPTO
    except OSError as exc:
        logger.debug("%s failed: %s", args.direction, exc)
        print(f"hexcrypt: error: {exc}", file=sys.stderr)
        return EXIT_IO

    logger.info("wrote %d bytes to %s", stats.bytes_written, args.destination)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
