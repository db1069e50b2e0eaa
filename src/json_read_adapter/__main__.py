"""
Command-line harness: rewrite a document and write it to standard output.

Usage:
    python -m json_read_adapter data.json
    python -m json_read_adapter --check < data.json
"""

import argparse
import json
import sys

from json_read_adapter import translate
from json_read_adapter._logger import get_logger
from json_read_adapter._logger import setup_logging

logger = get_logger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-read-adapter",
        description=(
            "Replace NaN, Infinity, -Infinity and oversized integers with "
            "same-length valid JSON."
        ),
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="document to rewrite (default: standard input)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="fail if the rewritten document still is not valid JSON",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="logging level (default: $LOG_LEVEL or WARNING)",
    )
    return parser


def _read_input(path: str | None) -> bytearray:
    if path is None or path == "-":
        return bytearray(sys.stdin.buffer.read())
    with open(path, "rb") as f:
        return bytearray(f.read())


def main(argv: list[str] | None = None) -> int:
    """Runs the harness and returns the process exit status."""
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        buf = _read_input(args.file)
    except OSError as e:
        print(f"json-read-adapter: {e}", file=sys.stderr)
        return 1

    length_before = len(buf)
    translate(buf)
    assert len(buf) == length_before, "rewrite changed the document length"
    logger.info("Rewrote %d bytes", length_before)

    if args.check:
        try:
            json.loads(buf)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            print(f"json-read-adapter: {e}", file=sys.stderr)
            return 1

    sys.stdout.buffer.write(buf)
    sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
