"""Shared parse carrier and lazy format entrypoint exports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from thriftfmt.pipeline.result import ThriftParseResult
from thriftfmt.pipeline.results import FormatRunResult

if TYPE_CHECKING:
    from thriftfmt.format.options import FormatOptions


def run_format(
    text: str,
    options: FormatOptions | None = None,
    *,
    parse: ThriftParseResult | None = None,
) -> FormatRunResult:
    from thriftfmt.format.runner import run_format as _run_format

    return _run_format(text, options=options, parse=parse)


def format_text(text: str, options: FormatOptions | None = None) -> str:
    from thriftfmt.format.runner import format_text as _format_text

    return _format_text(text, options=options)


__all__ = [
    "FormatRunResult",
    "ThriftParseResult",
    "format_text",
    "run_format",
]
