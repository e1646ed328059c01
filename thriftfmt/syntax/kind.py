"""Unified syntax kinds for parser and CST."""

from enum import IntEnum

from thriftfmt.lexer import TokenKind


class ThriftSyntaxKind(IntEnum):
    """Language syntax vocabulary (tokens + nodes).

    Token kinds share their values with `TokenKind`; node kinds start at 1000.
    """

    EOF = 1

    # Hidden / comment tokens
    WHITESPACE = 10
    NEWLINE = 11
    LINE_COMMENT = 12
    BLOCK_COMMENT = 13
    SKIPPED = 14

    # Lexical tokens
    IDENTIFIER = 20
    LITERAL = 21
    INTEGER = 22
    HEX_INTEGER = 23
    DOUBLE = 24

    EQUAL = 30
    LESS_THAN = 35
    GREATER_THAN = 36

    COLON = 40
    SEMICOLON = 41
    COMMA = 42
    STAR = 52

    LBRACE = 60
    RBRACE = 61
    LBRACKET = 62
    RBRACKET = 63
    LPAREN = 64
    RPAREN = 65

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

    # Node kinds
    DOCUMENT = 1000
    ERROR = 1001
    HEADER = 1002
    INCLUDE = 1003
    CPP_INCLUDE = 1004
    NAMESPACE = 1005
    DEFINITION = 1006
    CONST = 1007
    TYPEDEF = 1008
    ENUM = 1009
    ENUM_FIELD = 1010
    SENUM = 1011
    STRUCT = 1012
    UNION = 1013
    EXCEPTION = 1014
    SERVICE = 1015
    FIELD = 1016
    FIELD_ID = 1017
    FIELD_REQ = 1018
    FUNCTION = 1019
    ONEWAY = 1020
    FUNCTION_TYPE = 1021
    THROWS_LIST = 1022
    TYPE_ANNOTATIONS = 1023
    TYPE_ANNOTATION = 1024
    ANNOTATION_VALUE = 1025
    FIELD_TYPE = 1026
    BASE_TYPE = 1027
    REAL_BASE_TYPE = 1028
    CONTAINER_TYPE = 1029
    MAP_TYPE = 1030
    SET_TYPE = 1031
    LIST_TYPE = 1032
    CPP_TYPE = 1033
    CONST_VALUE = 1034
    INTEGER_VALUE = 1035
    CONST_LIST = 1036
    CONST_MAP = 1037
    CONST_MAP_ENTRY = 1038
    LIST_SEPARATOR = 1039

    @property
    def is_token(self) -> bool:
        return self.value < ThriftSyntaxKind.DOCUMENT.value

    @property
    def is_node(self) -> bool:
        return self.value >= ThriftSyntaxKind.DOCUMENT.value

    @property
    def is_comment(self) -> bool:
        return self in (ThriftSyntaxKind.LINE_COMMENT, ThriftSyntaxKind.BLOCK_COMMENT)

    @staticmethod
    def from_token_kind(kind: TokenKind) -> "ThriftSyntaxKind":
        try:
            return ThriftSyntaxKind[kind.name]
        except KeyError:
            raise ValueError(f"Unsupported token kind: {kind}") from None

    def to_token_kind(self) -> TokenKind:
        if not self.is_token:
            raise ValueError(f"{self.name} is a node kind, not a token kind")
        return TokenKind(self.value)
