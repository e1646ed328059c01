"""Tree walking and node classification shared by patch passes and the renderer."""

from collections import deque
from collections.abc import Callable
from typing import Final

from thriftfmt.cst import SyntaxElement, SyntaxNode, SyntaxToken
from thriftfmt.syntax import ThriftSyntaxKind

CONTAINER_KINDS: Final[frozenset[ThriftSyntaxKind]] = frozenset(
    {
        ThriftSyntaxKind.ENUM,
        ThriftSyntaxKind.STRUCT,
        ThriftSyntaxKind.UNION,
        ThriftSyntaxKind.EXCEPTION,
        ThriftSyntaxKind.SERVICE,
    }
)


def classify(element: SyntaxElement) -> ThriftSyntaxKind:
    return element.kind


def children_of(element: SyntaxElement) -> tuple[SyntaxElement, ...]:
    if isinstance(element, SyntaxToken):
        return ()
    return element.children


def walk(root: SyntaxElement, visit: Callable[[SyntaxElement], None]) -> None:
    """Breadth-first traversal visiting every element exactly once.

    Children are read after `visit` returns, so a visitor may mutate the
    child list of the element it is visiting.
    """
    queue: deque[SyntaxElement] = deque([root])
    while queue:
        element = queue.popleft()
        visit(element)
        queue.extend(children_of(element))


def walk_nodes(root: SyntaxNode, visit: Callable[[SyntaxNode], None]) -> None:
    def visit_node(element: SyntaxElement) -> None:
        if isinstance(element, SyntaxNode):
            visit(element)

    walk(root, visit_node)


def is_token(element: SyntaxElement | None, text: str) -> bool:
    return isinstance(element, SyntaxToken) and element.text == text


def is_eof(element: SyntaxElement | None) -> bool:
    return isinstance(element, SyntaxToken) and element.kind == ThriftSyntaxKind.EOF


def is_container_kind(element: SyntaxElement) -> bool:
    return element.kind in CONTAINER_KINDS


def is_list_separator(element: SyntaxElement | None) -> bool:
    return isinstance(element, SyntaxNode) and element.kind == ThriftSyntaxKind.LIST_SEPARATOR


def repeat_children(
    children: tuple[SyntaxElement, ...],
    kind: ThriftSyntaxKind,
) -> tuple[tuple[SyntaxElement, ...], tuple[SyntaxElement, ...]]:
    """Split `children` into the leading run of `kind` elements and the rest."""
    for index, child in enumerate(children):
        if child.kind != kind:
            return children[:index], children[index:]
    return children, ()
