"""``mscl-indent``: format MSCL files from the command line."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from mscl_engine.config import IndentConfig
from mscl_engine.runtime import telemetry
from mscl_engine.syntax.formatter import format_text

EXIT_OK = 0
EXIT_WOULD_CHANGE = 1
EXIT_ERROR = 2


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mscl-indent",
        description="Re-indent MSCL source files. Reads stdin when no file is given.",
    )
    parser.add_argument("files", nargs="*", type=Path, help="Files to format")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--check",
        action="store_true",
        help="Report files that would change and exit 1 instead of writing",
    )
    mode.add_argument(
        "-i",
        "--in-place",
        action="store_true",
        help="Rewrite files in place instead of printing to stdout",
    )
    parser.add_argument(
        "--indent-offset",
        type=int,
        default=None,
        help="Columns per nesting level (default: 4 or MSCL_ENGINE_INDENT_OFFSET)",
    )
    parser.add_argument(
        "--delete-trailing-whitespace",
        dest="delete_trailing_whitespace",
        action="store_true",
        default=None,
        help="Strip trailing whitespace from every line",
    )
    parser.add_argument(
        "--keep-trailing-whitespace",
        dest="delete_trailing_whitespace",
        action="store_false",
        help="Leave trailing whitespace alone",
    )
    parser.add_argument(
        "--keep-trailing-blank-lines",
        dest="delete_trailing_blank_lines",
        action="store_false",
        default=None,
        help="Do not remove blank lines at the end of the file",
    )
    parser.add_argument("--encoding", default="utf-8", help="Source file encoding")
    return parser.parse_args(argv)


def _config_from_args(args: argparse.Namespace) -> IndentConfig:
    overrides = {
        key: value
        for key, value in {
            "indent_offset": args.indent_offset,
            "delete_trailing_whitespace": args.delete_trailing_whitespace,
            "delete_trailing_blank_lines": args.delete_trailing_blank_lines,
        }.items()
        if value is not None
    }
    return IndentConfig.from_env().with_overrides(**overrides)


def _format_source(text: str, config: IndentConfig) -> str:
    newline = "\r\n" if "\r\n" in text else "\n"
    formatted = format_text(text.replace("\r\n", "\n"), config)
    return formatted.replace("\n", newline)


def _format_file(path: Path, args: argparse.Namespace, config: IndentConfig) -> int:
    try:
        with open(path, encoding=args.encoding, newline="") as handle:
            original = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        print(f"mscl-indent: {path}: {exc}", file=sys.stderr)
        return EXIT_ERROR

    formatted = _format_source(original, config)
    changed = formatted != original
    telemetry.record_event(
        "cli.format", level="debug", data={"path": str(path), "changed": changed}
    )
    if args.check:
        if changed:
            print(f"would reformat {path}")
            return EXIT_WOULD_CHANGE
        return EXIT_OK
    if args.in_place:
        if changed:
            with open(path, "w", encoding=args.encoding, newline="") as handle:
                handle.write(formatted)
        return EXIT_OK
    sys.stdout.write(formatted)
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        config = _config_from_args(args)
    except ValueError as exc:
        print(f"mscl-indent: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if not args.files:
        original = sys.stdin.read()
        formatted = _format_source(original, config)
        if args.check:
            return EXIT_WOULD_CHANGE if formatted != original else EXIT_OK
        sys.stdout.write(formatted)
        return EXIT_OK

    status = EXIT_OK
    with telemetry.span(
        "cli::format", component="cli", metadata={"files": len(args.files)}
    ):
        for path in args.files:
            status = max(status, _format_file(path, args, config))
    return status


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
