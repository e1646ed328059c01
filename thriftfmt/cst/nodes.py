"""Mutable CST with parent back references.

Patch passes splice synthetic elements into the tree, so unlike an immutable
green/red pair the nodes here own a plain list of children. `parent` is only
used for local sibling lookups.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeAlias

from thriftfmt.lexer import Token
from thriftfmt.syntax import ThriftSyntaxKind


class SyntaxToken:
    __slots__ = ("kind", "text", "source", "parent")

    def __init__(
        self,
        *,
        kind: ThriftSyntaxKind,
        text: str,
        source: Token | None = None,
        parent: SyntaxNode | None = None,
    ) -> None:
        self.kind = kind
        self.text = text
        self.source = source
        self.parent = parent

    @classmethod
    def from_token(cls, token: Token) -> SyntaxToken:
        return cls(kind=ThriftSyntaxKind.from_token_kind(token.kind), text=token.text, source=token)

    @classmethod
    def synthetic(cls, kind: ThriftSyntaxKind, text: str) -> SyntaxToken:
        """A token with no position in the source (inserted by a patch pass)."""
        return cls(kind=kind, text=text, source=None)

    @property
    def is_synthetic(self) -> bool:
        return self.source is None

    @property
    def index(self) -> int | None:
        """Index of the originating token in the token stream."""
        return None if self.source is None else self.source.index

    @property
    def line(self) -> int | None:
        return None if self.source is None else self.source.line

    def next_sibling(self) -> SyntaxElement | None:
        return _sibling(self, 1)

    def prev_sibling(self) -> SyntaxElement | None:
        return _sibling(self, -1)

    def __repr__(self) -> str:
        return f"SyntaxToken({self.kind.name}, {self.text!r})"


class SyntaxNode:
    __slots__ = ("kind", "parent", "_children")

    def __init__(
        self,
        *,
        kind: ThriftSyntaxKind,
        children: list[SyntaxElement] | None = None,
        parent: SyntaxNode | None = None,
    ) -> None:
        self.kind = kind
        self.parent = parent
        self._children: list[SyntaxElement] = []
        for child in children or ():
            self.append_child(child)

    @property
    def children(self) -> tuple[SyntaxElement, ...]:
        return tuple(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[SyntaxElement]:
        return iter(tuple(self._children))

    def child(self, index: int) -> SyntaxElement:
        return self._children[index]

    def index_of(self, element: SyntaxElement) -> int:
        """Position of `element` among the children, compared by identity."""
        for index, child in enumerate(self._children):
            if child is element:
                return index
        raise ValueError(f"{element!r} is not a child of {self!r}")

    def insert_child(self, index: int, element: SyntaxElement) -> None:
        element.parent = self
        self._children.insert(index, element)

    def append_child(self, element: SyntaxElement) -> None:
        element.parent = self
        self._children.append(element)

    def remove_child(self, element: SyntaxElement) -> None:
        del self._children[self.index_of(element)]
        element.parent = None

    def pop_last(self) -> SyntaxElement:
        element = self._children.pop()
        element.parent = None
        return element

    def child_nodes(self) -> tuple[SyntaxNode, ...]:
        return tuple(child for child in self._children if isinstance(child, SyntaxNode))

    def child_tokens(self) -> tuple[SyntaxToken, ...]:
        return tuple(child for child in self._children if isinstance(child, SyntaxToken))

    def descendants_tokens(self) -> tuple[SyntaxToken, ...]:
        tokens: list[SyntaxToken] = []

        def walk(node: SyntaxNode) -> None:
            for child in node._children:
                if isinstance(child, SyntaxToken):
                    tokens.append(child)
                else:
                    walk(child)

        walk(self)
        return tuple(tokens)

    @property
    def text(self) -> str:
        """Space-free concatenation of the token texts, for debugging and tests."""
        return "".join(token.text for token in self.descendants_tokens())

    def next_sibling(self) -> SyntaxElement | None:
        return _sibling(self, 1)

    def prev_sibling(self) -> SyntaxElement | None:
        return _sibling(self, -1)

    def __repr__(self) -> str:
        return f"SyntaxNode({self.kind.name}, children={len(self._children)})"


SyntaxElement: TypeAlias = SyntaxNode | SyntaxToken


def _sibling(element: SyntaxElement, step: int) -> SyntaxElement | None:
    parent = element.parent
    if parent is None:
        return None
    index = parent.index_of(element) + step
    if index < 0 or index >= len(parent):
        return None
    return parent.child(index)


def dump_tree(node: SyntaxElement, depth: int = 0) -> str:
    """Indented one-element-per-line rendering of a tree, for debugging."""
    pad = "  " * depth
    if isinstance(node, SyntaxToken):
        marker = " (synthetic)" if node.is_synthetic else ""
        return f"{pad}{node.kind.name} {node.text!r}{marker}"
    lines = [f"{pad}{node.kind.name}"]
    lines.extend(dump_tree(child, depth + 1) for child in node.children)
    return "\n".join(lines)
