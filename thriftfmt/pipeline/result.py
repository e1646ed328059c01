"""Parse carrier shared by the format pipeline and its callers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from thriftfmt.diagnostics import ThriftParseError, has_errors
from thriftfmt.parser.tree_sink import ParsedTree

if TYPE_CHECKING:
    from thriftfmt.cst import SyntaxNode
    from thriftfmt.diagnostics import Diagnostic
    from thriftfmt.lexer import TokenStream


@dataclass(slots=True)
class ThriftParseResult:
    """One parse lifecycle of a Thrift document: source text plus its tree and tokens."""

    source_text: str
    parsed: ParsedTree

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.parsed.diagnostics

    @property
    def has_errors(self) -> bool:
        return has_errors(self.parsed.diagnostics)

    @property
    def tokens(self) -> TokenStream:
        return self.parsed.tokens

    def syntax_root(self) -> SyntaxNode:
        return self.parsed.root

    def raise_for_errors(self) -> None:
        if self.has_errors:
            raise ThriftParseError(self.diagnostics)
