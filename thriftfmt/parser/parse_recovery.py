"""Parser recovery primitives."""

from dataclasses import dataclass
from enum import StrEnum

from thriftfmt.lexer import TokenKind
from thriftfmt.parser.marker import CompletedMarker
from thriftfmt.parser.parser import Parser
from thriftfmt.syntax import ThriftSyntaxKind


class RecoveryError(StrEnum):
    EOF = "eof"
    ALREADY_RECOVERED = "already_recovered"


@dataclass(frozen=True, slots=True)
class ParseRecoveryTokenSet:
    """Recover by consuming tokens into an ERROR node until a safe token is reached."""

    node_kind: ThriftSyntaxKind
    recovery_set: frozenset[TokenKind]

    def with_tokens(self, *kinds: TokenKind) -> "ParseRecoveryTokenSet":
        return ParseRecoveryTokenSet(
            node_kind=self.node_kind,
            recovery_set=self.recovery_set | frozenset(kinds),
        )

    def recover(self, parser: Parser) -> tuple[CompletedMarker | None, RecoveryError | None]:
        if parser.at(TokenKind.EOF):
            return None, RecoveryError.EOF

        if self.is_at_recovered(parser):
            return None, RecoveryError.ALREADY_RECOVERED

        marker = parser.start()
        while not parser.at(TokenKind.EOF) and not self.is_at_recovered(parser):
            parser.bump_any()

        return marker.complete(parser, self.node_kind), None

    def is_at_recovered(self, parser: Parser) -> bool:
        return parser.at_set(self.recovery_set)
