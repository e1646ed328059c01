"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


LEXER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_STRING",
    message="Unterminated string literal.",
    hint="Close the literal with the same quote it was opened with.",
    severity="error",
    category="lexer",
)

LEXER_UNTERMINATED_COMMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_COMMENT",
    message="Unterminated block comment.",
    hint="Close the comment with `*/`.",
    severity="error",
    category="lexer",
)

LEXER_UNEXPECTED_CHARACTER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNEXPECTED_CHARACTER",
    message="Unexpected character.",
    severity="error",
    category="lexer",
)

PARSER_EXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_TOKEN",
    message="Expected token",
    severity="error",
    category="parser",
)

PARSER_EXPECTED_TYPE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_TYPE",
    message="Expected a field type",
    hint="Use a base type, a container type or a type name.",
    severity="error",
    category="parser",
)

PARSER_EXPECTED_VALUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_VALUE",
    message="Expected a constant value",
    severity="error",
    category="parser",
)

PARSER_UNEXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNEXPECTED_TOKEN",
    message="Unexpected token",
    severity="error",
    category="parser",
)
