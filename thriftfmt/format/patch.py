"""Structural patch passes run on the CST before rendering."""

import logging

from thriftfmt.cst import SyntaxNode, SyntaxToken
from thriftfmt.format.options import FormatOptions
from thriftfmt.format.walk import classify, is_list_separator, walk_nodes
from thriftfmt.syntax import ThriftSyntaxKind

logger = logging.getLogger(__name__)

DEFAULT_REQUIREDNESS = "required"

_FIELD_OWNERS = frozenset({ThriftSyntaxKind.STRUCT, ThriftSyntaxKind.UNION, ThriftSyntaxKind.EXCEPTION})

_SEPARATED_KINDS = frozenset({ThriftSyntaxKind.ENUM_FIELD, ThriftSyntaxKind.FIELD, ThriftSyntaxKind.FUNCTION})

_INLINE_FIELD_OWNERS = frozenset({ThriftSyntaxKind.FUNCTION, ThriftSyntaxKind.THROWS_LIST})


def patch(root: SyntaxNode, options: FormatOptions) -> None:
    """Apply the enabled passes in their fixed order."""
    if options.patch_required:
        patch_field_requiredness(root)
    if options.patch_separator:
        patch_list_separators(root)
        patch_remove_last_list_separator(root)


def patch_field_requiredness(root: SyntaxNode) -> None:
    """Give every struct/union/exception member an explicit requiredness."""
    count = 0

    def visit(node: SyntaxNode) -> None:
        nonlocal count
        if classify(node) != ThriftSyntaxKind.FIELD:
            return
        if node.parent is None or classify(node.parent) not in _FIELD_OWNERS:
            return

        for index, child in enumerate(node.children):
            if classify(child) == ThriftSyntaxKind.FIELD_REQ:
                return
            if classify(child) == ThriftSyntaxKind.FIELD_TYPE:
                requiredness = _synthetic_node(
                    ThriftSyntaxKind.FIELD_REQ, ThriftSyntaxKind.REQUIRED_KW, DEFAULT_REQUIREDNESS
                )
                node.insert_child(index, requiredness)
                count += 1
                return

        raise RuntimeError(f"Field without a type: {node.text!r}")

    walk_nodes(root, visit)
    logger.debug("requiredness pass inserted %d qualifiers", count)


def patch_list_separators(root: SyntaxNode) -> None:
    """End every enum value, field and function with exactly one comma."""

    def visit(node: SyntaxNode) -> None:
        if classify(node) not in _SEPARATED_KINDS:
            return

        last = node.children[-1] if len(node) else None
        if is_list_separator(last):
            token = last.child(0)
            if isinstance(token, SyntaxToken) and token.text != ",":
                token.kind = ThriftSyntaxKind.COMMA
                token.text = ","
            return

        node.append_child(_synthetic_node(ThriftSyntaxKind.LIST_SEPARATOR, ThriftSyntaxKind.COMMA, ","))

    walk_nodes(root, visit)


def patch_remove_last_list_separator(root: SyntaxNode) -> None:
    """Drop the separator of the last parameter, throws member and annotation."""

    def visit(node: SyntaxNode) -> None:
        is_inline_field = (
            classify(node) == ThriftSyntaxKind.FIELD
            and node.parent is not None
            and classify(node.parent) in _INLINE_FIELD_OWNERS
        )
        is_annotation = classify(node) == ThriftSyntaxKind.TYPE_ANNOTATION
        if not (is_inline_field or is_annotation) or node.parent is None:
            return

        following = node.next_sibling()
        if following is not None and classify(following) == classify(node):
            return

        if len(node) and is_list_separator(node.children[-1]):
            node.pop_last()

    walk_nodes(root, visit)


def _synthetic_node(kind: ThriftSyntaxKind, token_kind: ThriftSyntaxKind, text: str) -> SyntaxNode:
    return SyntaxNode(kind=kind, children=[SyntaxToken.synthetic(token_kind, text)])
