"""Event-based parser core."""

from dataclasses import dataclass

from thriftfmt.diagnostics import Diagnostic, DiagnosticSpec
from thriftfmt.diagnostics.codes import PARSER_EXPECTED_TOKEN
from thriftfmt.lexer import KEYWORDS, Token, TokenKind
from thriftfmt.parser.event import Event, StartEvent, TokenEvent
from thriftfmt.parser.marker import Marker
from thriftfmt.parser.token_source import TokenSource
from thriftfmt.syntax import ThriftSyntaxKind
from thriftfmt.text import TextRange, TextSize


@dataclass(slots=True)
class ParserProgress:
    """Detect parser stalls inside list-style loops."""

    _position: TextSize | None = None

    def has_progressed(self, parser: "Parser") -> bool:
        has_progressed = self._position is None or self._position < parser.position
        self._position = parser.position
        return has_progressed

    def assert_progressing(self, parser: "Parser") -> None:
        if not self.has_progressed(parser):
            raise RuntimeError(f"Parser stopped making progress at {parser.current.name} {parser.current_range}")


class Parser:
    """Event-based parser."""

    def __init__(self, source: TokenSource) -> None:
        self._source = source
        self._events: list[Event] = []
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> TokenSource:
        return self._source

    @property
    def events(self) -> list[Event]:
        return self._events

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    @property
    def current(self) -> TokenKind:
        return self._source.current

    @property
    def current_token(self) -> Token:
        return self._source.current_token

    @property
    def current_range(self) -> TextRange:
        return self._source.current_range

    @property
    def position(self) -> TextSize:
        return self._source.position

    @property
    def has_preceding_line_break(self) -> bool:
        return self._source.has_preceding_line_break

    def at(self, kind: TokenKind) -> bool:
        return self.current == kind

    def at_set(self, kinds: frozenset[TokenKind] | set[TokenKind]) -> bool:
        return self.current in kinds

    def nth(self, n: int) -> TokenKind:
        return self._source.nth(n)

    def nth_at(self, n: int, kind: TokenKind) -> bool:
        return self.nth(n) == kind

    def start(self) -> Marker:
        pos = len(self._events)
        self._events.append(StartEvent.tombstone())
        return Marker(pos=pos, start=self.position)

    def bump(self) -> None:
        if self.current == TokenKind.EOF:
            return
        token = self._source.bump()
        self._events.append(
            TokenEvent(
                kind=ThriftSyntaxKind.from_token_kind(token.kind),
                index=token.index,
            )
        )

    def bump_any(self) -> None:
        self.bump()

    def eat(self, kind: TokenKind) -> bool:
        if self.current == kind:
            self.bump()
            return True
        return False

    def expect(self, kind: TokenKind) -> bool:
        if self.eat(kind):
            return True
        self.error_expected(kind)
        return False

    def error(self, diagnostic: Diagnostic) -> None:
        if self._diagnostics:
            previous = self._diagnostics[-1]
            if previous.range.start == diagnostic.range.start:
                return
        self._diagnostics.append(diagnostic)

    def error_spec(self, spec: DiagnosticSpec, message: str | None = None) -> None:
        self.error(
            Diagnostic(
                code=spec.code,
                message=message if message is not None else spec.message,
                range=self.current_range,
                severity=spec.severity,
                hint=spec.hint,
                category=spec.category,
            )
        )

    def error_expected(self, kind: TokenKind) -> None:
        found = self.current_token.text or self.current.name
        self.error_spec(PARSER_EXPECTED_TOKEN, f"Expected {_describe(kind)}, found {found!r}")

    def finish(self) -> tuple[list[Event], list[Diagnostic]]:
        return self._events, self._diagnostics


def _describe(kind: TokenKind) -> str:
    for text, keyword in KEYWORDS.items():
        if keyword == kind:
            return f"'{text}'"
    return kind.name
