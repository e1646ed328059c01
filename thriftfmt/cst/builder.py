"""Stack-based builder for the mutable CST."""

from thriftfmt.cst.nodes import SyntaxElement, SyntaxNode, SyntaxToken
from thriftfmt.lexer import Token
from thriftfmt.syntax import ThriftSyntaxKind


class TreeBuilder:
    """Biome-style tree builder producing mutable nodes."""

    def __init__(self) -> None:
        self._stack: list[SyntaxNode] = []
        self._roots: list[SyntaxElement] = []

    def start_node(self, kind: ThriftSyntaxKind) -> None:
        if not kind.is_node:
            raise RuntimeError(f"start_node called with token kind {kind.name}")
        self._stack.append(SyntaxNode(kind=kind))

    def token(self, token: Token) -> None:
        self._push_element(SyntaxToken.from_token(token))

    def finish_node(self) -> None:
        if not self._stack:
            raise RuntimeError("finish_node called with empty builder stack")

        node = self._stack.pop()
        self._push_element(node)

    def finish(self) -> SyntaxNode:
        if self._stack:
            raise RuntimeError("Cannot finish tree: unclosed nodes remain on stack")

        if len(self._roots) == 1 and isinstance(self._roots[0], SyntaxNode):
            root = self._roots[0]
            if root.kind == ThriftSyntaxKind.DOCUMENT:
                return root

        return SyntaxNode(kind=ThriftSyntaxKind.DOCUMENT, children=list(self._roots))

    def _push_element(self, element: SyntaxElement) -> None:
        if self._stack:
            self._stack[-1].append_child(element)
            return
        self._roots.append(element)
