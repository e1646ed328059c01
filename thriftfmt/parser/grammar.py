"""Thrift grammar routines that emit CST events."""

from collections.abc import Callable

from thriftfmt.diagnostics.codes import (
    PARSER_EXPECTED_TOKEN,
    PARSER_EXPECTED_TYPE,
    PARSER_EXPECTED_VALUE,
    PARSER_UNEXPECTED_TOKEN,
)
from thriftfmt.lexer import TokenKind
from thriftfmt.parser.parse_lists import ParseNodeList
from thriftfmt.parser.parse_recovery import ParseRecoveryTokenSet
from thriftfmt.parser.parser import Parser
from thriftfmt.syntax import ThriftSyntaxKind

HEADER_START: frozenset[TokenKind] = frozenset(
    {
        TokenKind.INCLUDE_KW,
        TokenKind.CPP_INCLUDE_KW,
        TokenKind.NAMESPACE_KW,
        TokenKind.CPP_NAMESPACE_KW,
        TokenKind.PHP_NAMESPACE_KW,
    }
)

DEFINITION_START: frozenset[TokenKind] = frozenset(
    {
        TokenKind.CONST_KW,
        TokenKind.TYPEDEF_KW,
        TokenKind.ENUM_KW,
        TokenKind.SENUM_KW,
        TokenKind.STRUCT_KW,
        TokenKind.UNION_KW,
        TokenKind.EXCEPTION_KW,
        TokenKind.SERVICE_KW,
    }
)

BASE_TYPES: frozenset[TokenKind] = frozenset(
    {
        TokenKind.BOOL_KW,
        TokenKind.BYTE_KW,
        TokenKind.I8_KW,
        TokenKind.I16_KW,
        TokenKind.I32_KW,
        TokenKind.I64_KW,
        TokenKind.DOUBLE_KW,
        TokenKind.STRING_KW,
        TokenKind.BINARY_KW,
        TokenKind.UUID_KW,
    }
)

CONTAINER_TYPES: frozenset[TokenKind] = frozenset({TokenKind.MAP_KW, TokenKind.SET_KW, TokenKind.LIST_KW})

TYPE_START: frozenset[TokenKind] = BASE_TYPES | CONTAINER_TYPES | {TokenKind.IDENTIFIER}

INTEGER_TOKENS: frozenset[TokenKind] = frozenset({TokenKind.INTEGER, TokenKind.HEX_INTEGER})

REQUIREDNESS: frozenset[TokenKind] = frozenset({TokenKind.REQUIRED_KW, TokenKind.OPTIONAL_KW})

FIELD_START: frozenset[TokenKind] = TYPE_START | INTEGER_TOKENS | REQUIREDNESS

ONEWAY_TOKENS: frozenset[TokenKind] = frozenset({TokenKind.ONEWAY_KW, TokenKind.ASYNC_KW})

FUNCTION_START: frozenset[TokenKind] = TYPE_START | ONEWAY_TOKENS | {TokenKind.VOID_KW}

CONST_VALUE_START: frozenset[TokenKind] = INTEGER_TOKENS | {
    TokenKind.DOUBLE,
    TokenKind.LITERAL,
    TokenKind.IDENTIFIER,
    TokenKind.LBRACKET,
    TokenKind.LBRACE,
}

SEPARATORS: frozenset[TokenKind] = frozenset({TokenKind.COMMA, TokenKind.SEMICOLON})


def parse_document(parser: Parser) -> None:
    root = parser.start()

    def parse_element(current: Parser) -> bool:
        if current.at_set(HEADER_START):
            parse_header(current)
            return True
        if current.at_set(DEFINITION_START):
            parse_definition(current)
            return True
        return False

    _parse_list(
        parser,
        end=frozenset(),
        parse_element=parse_element,
        recovery_set=HEADER_START | DEFINITION_START,
    )
    root.complete(parser, ThriftSyntaxKind.DOCUMENT)


# -------------------------
# Headers
# -------------------------


def parse_header(parser: Parser) -> None:
    marker = parser.start()
    match parser.current:
        case TokenKind.INCLUDE_KW:
            _parse_include(parser, ThriftSyntaxKind.INCLUDE)
        case TokenKind.CPP_INCLUDE_KW:
            _parse_include(parser, ThriftSyntaxKind.CPP_INCLUDE)
        case _:
            parse_namespace(parser)
    marker.complete(parser, ThriftSyntaxKind.HEADER)


def _parse_include(parser: Parser, kind: ThriftSyntaxKind) -> None:
    marker = parser.start()
    parser.bump()
    parser.expect(TokenKind.LITERAL)
    marker.complete(parser, kind)


def parse_namespace(parser: Parser) -> None:
    marker = parser.start()
    if parser.at(TokenKind.NAMESPACE_KW):
        parser.bump()
        if parser.eat(TokenKind.STAR):
            _expect_one_of(parser, {TokenKind.IDENTIFIER, TokenKind.LITERAL}, "a namespace name")
        else:
            parser.expect(TokenKind.IDENTIFIER)
            _expect_one_of(parser, {TokenKind.IDENTIFIER, TokenKind.LITERAL}, "a namespace name")
            if parser.at(TokenKind.LPAREN):
                parse_type_annotations(parser)
    else:
        # cpp_namespace / php_namespace
        parser.bump()
        parser.expect(TokenKind.IDENTIFIER)
    marker.complete(parser, ThriftSyntaxKind.NAMESPACE)


# -------------------------
# Definitions
# -------------------------


def parse_definition(parser: Parser) -> None:
    marker = parser.start()
    match parser.current:
        case TokenKind.CONST_KW:
            parse_const(parser)
        case TokenKind.TYPEDEF_KW:
            parse_typedef(parser)
        case TokenKind.ENUM_KW:
            parse_enum(parser)
        case TokenKind.SENUM_KW:
            parse_senum(parser)
        case TokenKind.STRUCT_KW:
            parse_struct_like(parser, ThriftSyntaxKind.STRUCT)
        case TokenKind.UNION_KW:
            parse_struct_like(parser, ThriftSyntaxKind.UNION)
        case TokenKind.EXCEPTION_KW:
            parse_struct_like(parser, ThriftSyntaxKind.EXCEPTION)
        case TokenKind.SERVICE_KW:
            parse_service(parser)
        case other:
            raise RuntimeError(f"parse_definition called at {other.name}")
    marker.complete(parser, ThriftSyntaxKind.DEFINITION)


def parse_const(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()
    parse_field_type(parser)
    parser.expect(TokenKind.IDENTIFIER)
    parser.expect(TokenKind.EQUAL)
    parse_const_value(parser)
    parse_list_separator(parser)
    marker.complete(parser, ThriftSyntaxKind.CONST)


def parse_typedef(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()
    parse_field_type(parser)
    parser.expect(TokenKind.IDENTIFIER)
    _parse_optional_annotations(parser)
    parse_list_separator(parser)
    marker.complete(parser, ThriftSyntaxKind.TYPEDEF)


def parse_enum(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()
    parser.expect(TokenKind.IDENTIFIER)
    if parser.expect(TokenKind.LBRACE):
        _parse_list(
            parser,
            end=frozenset({TokenKind.RBRACE}),
            parse_element=_when(frozenset({TokenKind.IDENTIFIER}), parse_enum_field),
            recovery_set=frozenset({TokenKind.RBRACE, TokenKind.IDENTIFIER}) | DEFINITION_START,
        )
        parser.expect(TokenKind.RBRACE)
    _parse_optional_annotations(parser)
    marker.complete(parser, ThriftSyntaxKind.ENUM)


def parse_enum_field(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()
    if parser.eat(TokenKind.EQUAL):
        parse_integer(parser)
    _parse_optional_annotations(parser)
    parse_list_separator(parser)
    marker.complete(parser, ThriftSyntaxKind.ENUM_FIELD)


def parse_senum(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()
    parser.expect(TokenKind.IDENTIFIER)
    if parser.expect(TokenKind.LBRACE):

        def parse_member(current: Parser) -> None:
            current.bump()
            parse_list_separator(current)

        _parse_list(
            parser,
            end=frozenset({TokenKind.RBRACE}),
            parse_element=_when(frozenset({TokenKind.LITERAL}), parse_member),
            recovery_set=frozenset({TokenKind.RBRACE, TokenKind.LITERAL}) | DEFINITION_START,
        )
        parser.expect(TokenKind.RBRACE)
    _parse_optional_annotations(parser)
    marker.complete(parser, ThriftSyntaxKind.SENUM)


def parse_struct_like(parser: Parser, kind: ThriftSyntaxKind) -> None:
    """`struct`, `union` and `exception` share one shape."""
    marker = parser.start()
    parser.bump()
    parser.expect(TokenKind.IDENTIFIER)
    if parser.expect(TokenKind.LBRACE):
        _parse_fields(parser, end=TokenKind.RBRACE)
        parser.expect(TokenKind.RBRACE)
    _parse_optional_annotations(parser)
    marker.complete(parser, kind)


def parse_service(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()
    parser.expect(TokenKind.IDENTIFIER)
    if parser.eat(TokenKind.EXTENDS_KW):
        parser.expect(TokenKind.IDENTIFIER)
    if parser.expect(TokenKind.LBRACE):
        _parse_list(
            parser,
            end=frozenset({TokenKind.RBRACE}),
            parse_element=_when(FUNCTION_START, parse_function),
            recovery_set=frozenset({TokenKind.RBRACE}) | FUNCTION_START | DEFINITION_START,
        )
        parser.expect(TokenKind.RBRACE)
    _parse_optional_annotations(parser)
    marker.complete(parser, ThriftSyntaxKind.SERVICE)


# -------------------------
# Members
# -------------------------


def parse_field(parser: Parser) -> None:
    marker = parser.start()

    if parser.at_set(INTEGER_TOKENS):
        field_id = parser.start()
        parse_integer(parser)
        parser.expect(TokenKind.COLON)
        field_id.complete(parser, ThriftSyntaxKind.FIELD_ID)

    if parser.at_set(REQUIREDNESS):
        requiredness = parser.start()
        parser.bump()
        requiredness.complete(parser, ThriftSyntaxKind.FIELD_REQ)

    parse_field_type(parser)
    parser.expect(TokenKind.IDENTIFIER)
    if parser.eat(TokenKind.EQUAL):
        parse_const_value(parser)
    _parse_optional_annotations(parser)
    parse_list_separator(parser)
    marker.complete(parser, ThriftSyntaxKind.FIELD)


def parse_function(parser: Parser) -> None:
    marker = parser.start()

    if parser.at_set(ONEWAY_TOKENS):
        oneway = parser.start()
        parser.bump()
        oneway.complete(parser, ThriftSyntaxKind.ONEWAY)

    function_type = parser.start()
    if not parser.eat(TokenKind.VOID_KW):
        parse_field_type(parser)
    function_type.complete(parser, ThriftSyntaxKind.FUNCTION_TYPE)

    parser.expect(TokenKind.IDENTIFIER)
    if parser.expect(TokenKind.LPAREN):
        _parse_fields(parser, end=TokenKind.RPAREN)
        parser.expect(TokenKind.RPAREN)
    if parser.at(TokenKind.THROWS_KW):
        parse_throws_list(parser)
    _parse_optional_annotations(parser)
    parse_list_separator(parser)
    marker.complete(parser, ThriftSyntaxKind.FUNCTION)


def parse_throws_list(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()
    if parser.expect(TokenKind.LPAREN):
        _parse_fields(parser, end=TokenKind.RPAREN)
        parser.expect(TokenKind.RPAREN)
    marker.complete(parser, ThriftSyntaxKind.THROWS_LIST)


def _parse_fields(parser: Parser, end: TokenKind) -> None:
    _parse_list(
        parser,
        end=frozenset({end}),
        parse_element=_when(FIELD_START, parse_field),
        recovery_set=frozenset({end, TokenKind.RBRACE}) | FIELD_START | DEFINITION_START,
    )


def parse_list_separator(parser: Parser) -> None:
    if not parser.at_set(SEPARATORS):
        return
    marker = parser.start()
    parser.bump()
    marker.complete(parser, ThriftSyntaxKind.LIST_SEPARATOR)


# -------------------------
# Annotations
# -------------------------


def parse_type_annotations(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()
    _parse_list(
        parser,
        end=frozenset({TokenKind.RPAREN}),
        parse_element=_when(frozenset({TokenKind.IDENTIFIER}), parse_type_annotation),
        recovery_set=frozenset({TokenKind.RPAREN, TokenKind.IDENTIFIER, TokenKind.RBRACE}) | DEFINITION_START,
    )
    parser.expect(TokenKind.RPAREN)
    marker.complete(parser, ThriftSyntaxKind.TYPE_ANNOTATIONS)


def parse_type_annotation(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()
    if parser.eat(TokenKind.EQUAL):
        value = parser.start()
        if parser.at_set(INTEGER_TOKENS):
            parse_integer(parser)
        elif not parser.eat(TokenKind.LITERAL):
            parser.error_spec(PARSER_EXPECTED_VALUE, "Expected an integer or a literal annotation value")
        value.complete(parser, ThriftSyntaxKind.ANNOTATION_VALUE)
    parse_list_separator(parser)
    marker.complete(parser, ThriftSyntaxKind.TYPE_ANNOTATION)


def _parse_optional_annotations(parser: Parser) -> None:
    if parser.at(TokenKind.LPAREN):
        parse_type_annotations(parser)


# -------------------------
# Types
# -------------------------


def parse_field_type(parser: Parser) -> bool:
    if not parser.at_set(TYPE_START):
        parser.error_spec(PARSER_EXPECTED_TYPE, f"Expected a field type, found {_found(parser)}")
        return False

    marker = parser.start()
    if parser.at(TokenKind.IDENTIFIER):
        parser.bump()
    elif parser.at_set(BASE_TYPES):
        parse_base_type(parser)
    else:
        parse_container_type(parser)
    marker.complete(parser, ThriftSyntaxKind.FIELD_TYPE)
    return True


def parse_base_type(parser: Parser) -> None:
    marker = parser.start()
    real = parser.start()
    parser.bump()
    real.complete(parser, ThriftSyntaxKind.REAL_BASE_TYPE)
    _parse_optional_annotations(parser)
    marker.complete(parser, ThriftSyntaxKind.BASE_TYPE)


def parse_container_type(parser: Parser) -> None:
    marker = parser.start()
    match parser.current:
        case TokenKind.MAP_KW:
            parse_map_type(parser)
        case TokenKind.SET_KW:
            parse_set_type(parser)
        case _:
            parse_list_type(parser)
    _parse_optional_annotations(parser)
    marker.complete(parser, ThriftSyntaxKind.CONTAINER_TYPE)


def parse_map_type(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()
    if parser.at(TokenKind.CPP_TYPE_KW):
        parse_cpp_type(parser)
    parser.expect(TokenKind.LESS_THAN)
    parse_field_type(parser)
    parser.expect(TokenKind.COMMA)
    parse_field_type(parser)
    parser.expect(TokenKind.GREATER_THAN)
    marker.complete(parser, ThriftSyntaxKind.MAP_TYPE)


def parse_set_type(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()
    if parser.at(TokenKind.CPP_TYPE_KW):
        parse_cpp_type(parser)
    parser.expect(TokenKind.LESS_THAN)
    parse_field_type(parser)
    parser.expect(TokenKind.GREATER_THAN)
    marker.complete(parser, ThriftSyntaxKind.SET_TYPE)


def parse_list_type(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()
    parser.expect(TokenKind.LESS_THAN)
    parse_field_type(parser)
    parser.expect(TokenKind.GREATER_THAN)
    if parser.at(TokenKind.CPP_TYPE_KW):
        parse_cpp_type(parser)
    marker.complete(parser, ThriftSyntaxKind.LIST_TYPE)


def parse_cpp_type(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()
    parser.expect(TokenKind.LITERAL)
    marker.complete(parser, ThriftSyntaxKind.CPP_TYPE)


# -------------------------
# Constant values
# -------------------------


def parse_integer(parser: Parser) -> bool:
    if not parser.at_set(INTEGER_TOKENS):
        parser.error_spec(PARSER_EXPECTED_TOKEN, f"Expected an integer, found {_found(parser)}")
        return False
    marker = parser.start()
    parser.bump()
    marker.complete(parser, ThriftSyntaxKind.INTEGER_VALUE)
    return True


def parse_const_value(parser: Parser) -> bool:
    if not parser.at_set(CONST_VALUE_START):
        parser.error_spec(PARSER_EXPECTED_VALUE, f"Expected a constant value, found {_found(parser)}")
        return False

    marker = parser.start()
    if parser.at_set(INTEGER_TOKENS):
        parse_integer(parser)
    elif parser.at(TokenKind.LBRACKET):
        parse_const_list(parser)
    elif parser.at(TokenKind.LBRACE):
        parse_const_map(parser)
    else:
        parser.bump()
    marker.complete(parser, ThriftSyntaxKind.CONST_VALUE)
    return True


def parse_const_list(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()

    def parse_item(current: Parser) -> None:
        parse_const_value(current)
        parse_list_separator(current)

    _parse_list(
        parser,
        end=frozenset({TokenKind.RBRACKET}),
        parse_element=_when(CONST_VALUE_START, parse_item),
        recovery_set=frozenset({TokenKind.RBRACKET, TokenKind.RBRACE}) | CONST_VALUE_START,
    )
    parser.expect(TokenKind.RBRACKET)
    marker.complete(parser, ThriftSyntaxKind.CONST_LIST)


def parse_const_map(parser: Parser) -> None:
    marker = parser.start()
    parser.bump()
    _parse_list(
        parser,
        end=frozenset({TokenKind.RBRACE}),
        parse_element=_when(CONST_VALUE_START, parse_const_map_entry),
        recovery_set=frozenset({TokenKind.RBRACE, TokenKind.RBRACKET}) | CONST_VALUE_START,
    )
    parser.expect(TokenKind.RBRACE)
    marker.complete(parser, ThriftSyntaxKind.CONST_MAP)


def parse_const_map_entry(parser: Parser) -> None:
    marker = parser.start()
    parse_const_value(parser)
    parser.expect(TokenKind.COLON)
    parse_const_value(parser)
    parse_list_separator(parser)
    marker.complete(parser, ThriftSyntaxKind.CONST_MAP_ENTRY)


# -------------------------
# Helpers
# -------------------------


def _parse_list(
    parser: Parser,
    *,
    end: frozenset[TokenKind],
    parse_element: Callable[[Parser], bool],
    recovery_set: frozenset[TokenKind],
) -> int:
    recovery = ParseRecoveryTokenSet(
        node_kind=ThriftSyntaxKind.ERROR,
        recovery_set=recovery_set | end,
    )

    def recover_element(current: Parser, parsed: bool) -> bool:
        if parsed:
            return True

        current.error_spec(PARSER_UNEXPECTED_TOKEN, f"Unexpected token {_found(current)}")
        _, recovery_error = recovery.recover(current)
        return recovery_error is None

    return ParseNodeList(
        is_at_list_end=lambda current: current.at_set(end),
        parse_element=parse_element,
        recover=recover_element,
    ).parse_list(parser)


def _when(start: frozenset[TokenKind], parse: Callable[[Parser], None]) -> Callable[[Parser], bool]:
    def parse_element(parser: Parser) -> bool:
        if not parser.at_set(start):
            return False
        parse(parser)
        return True

    return parse_element


def _expect_one_of(parser: Parser, kinds: set[TokenKind], description: str) -> bool:
    if parser.at_set(kinds):
        parser.bump()
        return True
    parser.error_spec(PARSER_EXPECTED_TOKEN, f"Expected {description}, found {_found(parser)}")
    return False


def _found(parser: Parser) -> str:
    if parser.at(TokenKind.EOF):
        return "end of file"
    return repr(parser.current_token.text)
