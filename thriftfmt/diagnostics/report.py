"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from thriftfmt.diagnostics.diagnostic import Diagnostic
from thriftfmt.text import LineIndex


def collect_diagnostics(*groups: Iterable[Diagnostic]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for group in groups:
        diagnostics.extend(group)
    return diagnostics


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def format_diagnostic(diagnostic: Diagnostic, source: str, path: str = "<stdin>") -> str:
    """Render a diagnostic as `path:line:col: severity CODE: message`."""
    line, col = LineIndex(source).line_col(diagnostic.range.start)
    return f"{path}:{line}:{col}: {diagnostic.severity} {diagnostic.code}: {diagnostic.message}"


class ThriftParseError(ValueError):
    """Raised when source text cannot be turned into a valid syntax tree."""

    def __init__(self, diagnostics: Iterable[Diagnostic]) -> None:
        self.diagnostics: list[Diagnostic] = list(diagnostics)
        first = self.diagnostics[0] if self.diagnostics else None
        if first is None:
            message = "Failed to parse Thrift source"
        else:
            message = f"{first.message} at {first.range.as_tuple()}"
            if len(self.diagnostics) > 1:
                message += f" (+{len(self.diagnostics) - 1} more)"
        super().__init__(message)
