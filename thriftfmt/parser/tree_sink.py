"""Tree sink that replays parser events into a mutable CST."""

from dataclasses import dataclass

from thriftfmt.cst import SyntaxNode, TreeBuilder
from thriftfmt.diagnostics import Diagnostic
from thriftfmt.lexer import TokenKind, TokenStream
from thriftfmt.syntax import ThriftSyntaxKind


@dataclass(frozen=True, slots=True)
class ParsedTree:
    root: SyntaxNode
    tokens: TokenStream
    diagnostics: list[Diagnostic]


class ThriftTreeSink:
    """Converts parser events into a CST whose tokens point back into the stream."""

    def __init__(self, stream: TokenStream, builder: TreeBuilder | None = None) -> None:
        self._stream = stream
        self._parents_count = 0
        self._errors: list[Diagnostic] = []
        self._builder = builder if builder is not None else TreeBuilder()
        self._needs_eof = True

    def token(self, kind: ThriftSyntaxKind, index: int) -> None:
        token = self._stream[index]
        if ThriftSyntaxKind.from_token_kind(token.kind) != kind:
            raise RuntimeError(f"Token event {kind.name} does not match stream token {token.kind.name} at {index}")
        if token.kind == TokenKind.EOF:
            self._needs_eof = False
        self._builder.token(token)

    def start_node(self, kind: ThriftSyntaxKind) -> None:
        self._builder.start_node(kind)
        self._parents_count += 1

    def finish_node(self) -> None:
        self._parents_count -= 1
        if self._parents_count < 0:
            raise RuntimeError("finish_node called more often than start_node")

        if self._parents_count == 0 and self._needs_eof:
            eof = self._stream[len(self._stream) - 1]
            self.token(ThriftSyntaxKind.EOF, eof.index)

        self._builder.finish_node()

    def errors(self, errors: list[Diagnostic]) -> None:
        self._errors = list(errors)

    def finish(self) -> ParsedTree:
        return ParsedTree(root=self._builder.finish(), tokens=self._stream, diagnostics=self._errors)
