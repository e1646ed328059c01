"""Mutable concrete syntax tree."""

from thriftfmt.cst.builder import TreeBuilder
from thriftfmt.cst.nodes import SyntaxElement, SyntaxNode, SyntaxToken, dump_tree

__all__ = [
    "SyntaxElement",
    "SyntaxNode",
    "SyntaxToken",
    "TreeBuilder",
    "dump_tree",
]
