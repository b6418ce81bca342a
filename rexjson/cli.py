from __future__ import annotations

import argparse
import io
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import TextIO

from .config import ConfigurationError, PatternFile, collect_patterns, compile_patterns, load_pattern_file
from .processor import Processor

logger = logging.getLogger(__name__)


def _package_version() -> str:
    try:
        return version("rexjson")
    except PackageNotFoundError:
        return "dev"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rexjson",
        description="Extract and merge fields from text using all specified regex patterns.",
    )
    parser.add_argument(
        "-r", "--regex", dest="patterns", action="append", default=[], metavar="PATTERN",
        help="Regular expression with named capture groups. Can be specified multiple times.",
    )
    parser.add_argument("-f", "--file", type=str, default=None, help="Path to a JSON or YAML file with a 'patterns' array")
    parser.add_argument("-i", "--input", type=str, default="-", help="Input file path or '-' for stdin")
    parser.add_argument("-o", "--output", type=str, default="-", help="Output file path or '-' for stdout")
    parser.add_argument("-u", "--unique", action="store_true", help="Keep values of a multi-valued field unique")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s version {_package_version()}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    raw_patterns: list[str] | None = None
    try:
        pattern_file: PatternFile | None = load_pattern_file(args.file) if args.file else None
        raw_patterns = collect_patterns(args.patterns, pattern_file)
        patterns = compile_patterns(raw_patterns)
    except ConfigurationError as e:
        logger.error("%s", e)
        if raw_patterns == []:
            parser.print_usage(sys.stderr)
        return 1

    processor = Processor(patterns=patterns, unique=args.unique)

    try:
        src = _open_input(args.input)
    except OSError as e:
        logger.error("Could not open input file %s: %s", args.input, e)
        return 1

    try:
        dst = _open_output(args.output)
    except OSError as e:
        logger.error("Could not create output file %s: %s", args.output, e)
        _release(src, args.input)
        return 1

    try:
        processor.process_stream(src, dst)
        return 0
    except OSError as e:
        logger.error("Error during processing: %s", e)
        return 1
    finally:
        _release(src, args.input)
        _release(dst, args.output)


# Lines are split on "\n" only; a lone "\r" stays part of the line.
def _open_input(path: str) -> TextIO:
    if path == "-":
        return io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", errors="replace", newline="\n")
    return open(path, "r", encoding="utf-8", errors="replace", newline="\n")


def _open_output(path: str) -> TextIO:
    if path == "-":
        return io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", newline="\n")
    return open(path, "w", encoding="utf-8", newline="\n")


def _release(stream: TextIO, path: str) -> None:
    """Close opened files; detach stdio wrappers so the process streams stay open."""
    if path == "-":
        stream.detach()  # type: ignore[attr-defined]
    else:
        stream.close()


if __name__ == "__main__":
    raise SystemExit(main())
