"""Pipeline run result carriers."""

from __future__ import annotations

from dataclasses import dataclass

from thriftfmt.diagnostics import Diagnostic
from thriftfmt.pipeline.result import ThriftParseResult


@dataclass(frozen=True, slots=True)
class FormatRunResult:
    """Result of formatting from a shared parse result."""

    parse: ThriftParseResult
    formatted_text: str
    diagnostics: list[Diagnostic]
    changed: bool
