"""Diagnostics."""

from thriftfmt.diagnostics.codes import (
    LEXER_UNEXPECTED_CHARACTER,
    LEXER_UNTERMINATED_COMMENT,
    LEXER_UNTERMINATED_STRING,
    PARSER_EXPECTED_TOKEN,
    PARSER_EXPECTED_TYPE,
    PARSER_EXPECTED_VALUE,
    PARSER_UNEXPECTED_TOKEN,
    DiagnosticSpec,
)
from thriftfmt.diagnostics.diagnostic import Diagnostic, Severity
from thriftfmt.diagnostics.report import (
    ThriftParseError,
    collect_diagnostics,
    format_diagnostic,
    has_errors,
)

__all__ = [
    "LEXER_UNEXPECTED_CHARACTER",
    "LEXER_UNTERMINATED_COMMENT",
    "LEXER_UNTERMINATED_STRING",
    "PARSER_EXPECTED_TOKEN",
    "PARSER_EXPECTED_TYPE",
    "PARSER_EXPECTED_VALUE",
    "PARSER_UNEXPECTED_TOKEN",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "ThriftParseError",
    "collect_diagnostics",
    "format_diagnostic",
    "has_errors",
]
