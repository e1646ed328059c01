"""Lexer tokens."""

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Final

from thriftfmt.text import TextRange


class TokenKind(IntEnum):
    # -------------------------
    # Special / sentinels
    # -------------------------
    EOF = 1

    # -------------------------
    # Hidden and comment tokens (emitted by the lexer)
    # -------------------------
    WHITESPACE = 10
    NEWLINE = 11
    LINE_COMMENT = 12  # // ... or # ...
    BLOCK_COMMENT = 13  # /* ... */
    SKIPPED = 14  # bytes the lexer does not understand

    # -------------------------
    # Identifiers / literals
    # -------------------------
    IDENTIFIER = 20
    LITERAL = 21  # quoted string
    INTEGER = 22
    HEX_INTEGER = 23
    DOUBLE = 24

    # -------------------------
    # Punctuation
    # -------------------------
    EQUAL = 30  # =
    LESS_THAN = 35  # <
    GREATER_THAN = 36  # >

    COLON = 40  # :
    SEMICOLON = 41  # ;
    COMMA = 42  # ,
    STAR = 52  # *

    LBRACE = 60  # {
    RBRACE = 61  # }
    LBRACKET = 62  # [
    RBRACKET = 63  # ]
    LPAREN = 64  # (
    RPAREN = 65  # )

    # -------------------------
    # Keywords
    # -------------------------
    INCLUDE_KW = 100
    CPP_INCLUDE_KW = 101
    NAMESPACE_KW = 102
    CPP_NAMESPACE_KW = 103
    PHP_NAMESPACE_KW = 104
    CONST_KW = 110
    TYPEDEF_KW = 111
    ENUM_KW = 112
    SENUM_KW = 113
    STRUCT_KW = 114
    UNION_KW = 115
    EXCEPTION_KW = 116
    SERVICE_KW = 117
    EXTENDS_KW = 118
    REQUIRED_KW = 120
    OPTIONAL_KW = 121
    ONEWAY_KW = 122
    ASYNC_KW = 123
    VOID_KW = 124
    THROWS_KW = 125
    MAP_KW = 130
    SET_KW = 131
    LIST_KW = 132
    CPP_TYPE_KW = 133
    BOOL_KW = 140
    BYTE_KW = 141
    I8_KW = 142
    I16_KW = 143
    I32_KW = 144
    I64_KW = 145
    DOUBLE_KW = 146
    STRING_KW = 147
    BINARY_KW = 148
    UUID_KW = 149

    @property
    def is_comment(self) -> bool:
        return self in (TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT)

    @property
    def is_hidden(self) -> bool:
        return self in (
            TokenKind.WHITESPACE,
            TokenKind.NEWLINE,
            TokenKind.SKIPPED,
        )

    @property
    def is_keyword(self) -> bool:
        return self.value >= TokenKind.INCLUDE_KW.value


class TokenChannel(IntEnum):
    """Which consumer a token is meant for."""

    DEFAULT = 0  # grammar tokens
    HIDDEN = 1  # whitespace, newlines, skipped bytes
    COMMENT = 2


def channel_of(kind: TokenKind) -> TokenChannel:
    if kind.is_comment:
        return TokenChannel.COMMENT
    if kind.is_hidden:
        return TokenChannel.HIDDEN
    return TokenChannel.DEFAULT


KEYWORDS: Final[dict[str, TokenKind]] = {
    "include": TokenKind.INCLUDE_KW,
    "cpp_include": TokenKind.CPP_INCLUDE_KW,
    "namespace": TokenKind.NAMESPACE_KW,
    "cpp_namespace": TokenKind.CPP_NAMESPACE_KW,
    "php_namespace": TokenKind.PHP_NAMESPACE_KW,
    "const": TokenKind.CONST_KW,
    "typedef": TokenKind.TYPEDEF_KW,
    "enum": TokenKind.ENUM_KW,
    "senum": TokenKind.SENUM_KW,
    "struct": TokenKind.STRUCT_KW,
    "union": TokenKind.UNION_KW,
    "exception": TokenKind.EXCEPTION_KW,
    "service": TokenKind.SERVICE_KW,
    "extends": TokenKind.EXTENDS_KW,
    "required": TokenKind.REQUIRED_KW,
    "optional": TokenKind.OPTIONAL_KW,
    "oneway": TokenKind.ONEWAY_KW,
    "async": TokenKind.ASYNC_KW,
    "void": TokenKind.VOID_KW,
    "throws": TokenKind.THROWS_KW,
    "map": TokenKind.MAP_KW,
    "set": TokenKind.SET_KW,
    "list": TokenKind.LIST_KW,
    "cpp_type": TokenKind.CPP_TYPE_KW,
    "bool": TokenKind.BOOL_KW,
    "byte": TokenKind.BYTE_KW,
    "i8": TokenKind.I8_KW,
    "i16": TokenKind.I16_KW,
    "i32": TokenKind.I32_KW,
    "i64": TokenKind.I64_KW,
    "double": TokenKind.DOUBLE_KW,
    "string": TokenKind.STRING_KW,
    "binary": TokenKind.BINARY_KW,
    "uuid": TokenKind.UUID_KW,
}


class TokenFlags(IntFlag):
    """Token metadata flags."""

    NONE = 0
    PRECEDING_LINE_BREAK = 1 << 0  # NEWLINE before
    HAS_ESCAPE = 1 << 1
    UNTERMINATED = 1 << 2


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token, positioned in both the text and the token stream."""

    kind: TokenKind
    range: TextRange
    text: str
    line: int
    index: int
    flags: TokenFlags = TokenFlags.NONE

    @property
    def channel(self) -> TokenChannel:
        return channel_of(self.kind)

    @property
    def end_line(self) -> int:
        """Line of the token's last character (block comments and literals may span lines)."""
        text = self.text
        return self.line + text.count("\n") + text.count("\r") - text.count("\r\n")

    def has_preceding_line_break(self) -> bool:
        return bool(self.flags & TokenFlags.PRECEDING_LINE_BREAK)
