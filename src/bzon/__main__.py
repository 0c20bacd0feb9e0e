"""
Command-line smoke test for the codec.

Decodes a bencoded buffer, prints the resulting value tree, then prints the
re-encoded bytes. Reads FILE, standard input for ``-``, or a built-in
sample when no argument is given.
"""

import argparse
import logging
import sys
from pathlib import Path
from pprint import pformat
from typing import Any

import bzon

logger = logging.getLogger("bzon.cli")

SAMPLE = b"d1:ad2:xyd20:abcdefghij0123456789i555eeee"


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError("must be non-negative")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bzon",
        description="Decode a bencoded buffer and re-encode it.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="bencoded file to read, '-' for stdin (default: sample buffer)",
    )
    parser.add_argument(
        "--sort-keys",
        action="store_true",
        help="re-encode dictionaries with keys in byte order",
    )
    parser.add_argument(
        "--max-depth",
        type=_non_negative_int,
        default=None,
        help=f"maximum nesting depth (default: {bzon.DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    return parser


def _read_input(source: str | None) -> bytes:
    if source is None:
        return SAMPLE
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        data = _read_input(args.file)
    except OSError as e:
        print(f"bzon: {e}", file=sys.stderr)
        return 1

    decode_options: dict[str, Any] = {}
    if args.max_depth is not None:
        decode_options["max_depth"] = args.max_depth

    logger.debug("Decoding %d bytes", len(data))
    try:
        value = bzon.decode(data, **decode_options)
    except bzon.BencodeDecodeError as e:
        print(f"bzon: {e}", file=sys.stderr)
        return 1

    print(f"Decoded => {pformat(value)}")
    encoded = bzon.encode(value, sort_keys=args.sort_keys)
    print(f"Reencoded => {encoded!r}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
