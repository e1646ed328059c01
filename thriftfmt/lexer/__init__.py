"""Lexer."""

from thriftfmt.lexer.lexer import Lexer, dump_tokens, tokenize
from thriftfmt.lexer.stream import TokenStream
from thriftfmt.lexer.tokens import (
    KEYWORDS,
    Token,
    TokenChannel,
    TokenFlags,
    TokenKind,
    channel_of,
)

__all__ = [
    "KEYWORDS",
    "Lexer",
    "Token",
    "TokenChannel",
    "TokenFlags",
    "TokenKind",
    "TokenStream",
    "channel_of",
    "dump_tokens",
    "tokenize",
]
