"""Syntax kinds."""

from thriftfmt.syntax.kind import ThriftSyntaxKind

__all__ = ["ThriftSyntaxKind"]
