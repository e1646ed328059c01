"""Format runner over a shared Thrift parse result."""

from __future__ import annotations

import logging

from thriftfmt.format.formatter import ThriftFormatter
from thriftfmt.format.options import FormatOptions
from thriftfmt.parser import parse_result
from thriftfmt.pipeline.result import ThriftParseResult
from thriftfmt.pipeline.results import FormatRunResult

logger = logging.getLogger(__name__)


def run_format(
    text: str,
    options: FormatOptions | None = None,
    *,
    parse: ThriftParseResult | None = None,
) -> FormatRunResult:
    """Run formatting from a single parse lifecycle.

    Raises `ThriftParseError` when the source has syntax errors; the
    formatter only accepts well-formed trees.
    """
    resolved_parse = _resolve_parse(text, parse=parse)
    resolved_parse.raise_for_errors()

    formatter = ThriftFormatter(
        resolved_parse.syntax_root(),
        resolved_parse.tokens,
        options if options is not None else FormatOptions(),
    )
    formatted_text = formatter.format()
    changed = formatted_text != resolved_parse.source_text
    logger.debug("format run finished, changed=%s", changed)

    return FormatRunResult(
        parse=resolved_parse,
        formatted_text=formatted_text,
        diagnostics=list(resolved_parse.diagnostics),
        changed=changed,
    )


def format_text(text: str, options: FormatOptions | None = None) -> str:
    return run_format(text, options=options).formatted_text


def _resolve_parse(text: str, *, parse: ThriftParseResult | None) -> ThriftParseResult:
    if parse is not None:
        if parse.source_text != text:
            raise ValueError("Provided parse result was produced from different source text")
        return parse
    return parse_result(text)
