"""Command line entry point: `thriftfmt [paths...]`."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from tqdm import tqdm

from thriftfmt import __version__
from thriftfmt.diagnostics import ThriftParseError, format_diagnostic
from thriftfmt.format import DEFAULT_INDENT, FormatOptions, run_format

logger = logging.getLogger(__name__)

STDIN = "-"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="thriftfmt", description="Format Thrift IDL files")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "paths",
        nargs="*",
        default=[STDIN],
        help="Files or directories to format; '-' or nothing reads stdin",
    )
    parser.add_argument("-w", "--write", action="store_true", help="Rewrite files in place")
    parser.add_argument(
        "-i",
        "--indent",
        type=_positive_int,
        default=DEFAULT_INDENT,
        help=f"Spaces per indentation level (default: {DEFAULT_INDENT})",
    )
    parser.add_argument(
        "--no-patch-required",
        dest="patch_required",
        action="store_false",
        help="Do not add 'required' to struct fields without a requiredness",
    )
    parser.add_argument(
        "--no-patch-separator",
        dest="patch_separator",
        action="store_false",
        help="Keep list separators as written",
    )
    parser.add_argument(
        "--remove-comment",
        dest="keep_comment",
        action="store_false",
        help="Drop all comments from the output",
    )
    parser.add_argument("--align-assign", action="store_true", help="Align '=' across member blocks")
    parser.add_argument(
        "--align-field",
        action="store_true",
        help="Align every member element into columns (wins over --align-assign)",
    )
    parser.add_argument("--progress", action="store_true", help="Show a tqdm progress bar over files")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    options = FormatOptions(
        indent=args.indent,
        patch_required=args.patch_required,
        patch_separator=args.patch_separator,
        keep_comment=args.keep_comment,
        align_by_assign=args.align_assign,
        align_by_field=args.align_field,
    )

    sources = collect_sources(args.paths)
    if args.write and STDIN in sources:
        print("thriftfmt: --write cannot be used with stdin", file=sys.stderr)
        return 2

    status = 0
    iterator = tqdm(sources, desc="thriftfmt", unit="file") if args.progress else sources
    for source in iterator:
        if not format_source(source, options, write=args.write):
            status = 1
    return status


def collect_sources(paths: Sequence[str]) -> list[str]:
    """Expand directories into their `*.thrift` files, keeping order and dropping repeats."""
    sources: list[str] = []
    for raw in paths:
        if raw == STDIN:
            candidates = [STDIN]
        else:
            path = Path(raw)
            candidates = [str(p) for p in sorted(path.rglob("*.thrift"))] if path.is_dir() else [raw]
        for candidate in candidates:
            if candidate not in sources:
                sources.append(candidate)
    return sources


def format_source(source: str, options: FormatOptions, *, write: bool) -> bool:
    """Format one file (or stdin). Returns False when the source could not be formatted."""
    if source == STDIN:
        text = sys.stdin.read()
        display = "<stdin>"
    else:
        try:
            text = Path(source).read_text(encoding="utf-8")
        except OSError as exc:
            print(f"{source}: {exc.strerror or exc}", file=sys.stderr)
            return False
        display = source

    try:
        result = run_format(text, options)
    except ThriftParseError as exc:
        for diagnostic in exc.diagnostics:
            print(format_diagnostic(diagnostic, text, display), file=sys.stderr)
        return False

    output = result.formatted_text + "\n"
    if write:
        if output != text:
            Path(source).write_text(output, encoding="utf-8")
            logger.info("reformatted %s", display)
        else:
            logger.debug("unchanged %s", display)
    else:
        sys.stdout.write(output)
    return True


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid indent: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"indent must be positive, got {number}")
    return number


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
