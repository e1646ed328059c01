import logging
from collections.abc import Sequence

import pytest

from thriftfmt.cst import SyntaxElement, SyntaxNode
from thriftfmt.format import FormatOptions, PureThriftFormatter, assign_column_levels, calculate_padding, patch
from thriftfmt.format.align import NO_PADDING, split_at_assign
from thriftfmt.parser import parse
from thriftfmt.syntax import ThriftSyntaxKind as K


def measure(element: SyntaxElement, children: Sequence[SyntaxElement] | None) -> str:
    formatter = PureThriftFormatter()
    if children is None:
        return formatter.format_node(element)
    assert isinstance(element, SyntaxNode)
    return formatter.format_children(element, children)


def members(source: str, options: FormatOptions) -> tuple[SyntaxElement, ...]:
    root = parse(source).root
    patch(root, options)
    container = root.child(0).child(0)
    assert isinstance(container, SyntaxNode)
    return tuple(child for child in container.children if child.kind in (K.FIELD, K.ENUM_FIELD))


def test_levels_follow_sequence_order() -> None:
    assert assign_column_levels([["a", "b", "c"], ["a", "c"]]) == {"a": 0, "b": 1, "c": 2}


def test_levels_take_the_longest_path() -> None:
    levels = assign_column_levels([["id", "type", "name", "sep"], ["id", "name", "eq", "value", "sep"]])

    assert levels == {"id": 0, "type": 1, "name": 2, "sep": 5, "eq": 3, "value": 4}


def test_levels_of_nothing() -> None:
    assert assign_column_levels([]) == {}


@pytest.mark.parametrize(
    "sequences",
    [
        [["a", "b"], ["b", "a"]],
        [["a", "b", "c"], ["c", "a"]],
        [["a", "b", "a"]],
    ],
    ids=["two_cycle", "three_cycle", "repeated_identity"],
)
def test_levels_fail_without_consistent_order(sequences: list[list[str]]) -> None:
    assert assign_column_levels(sequences) is None


def test_no_members_no_padding() -> None:
    assert calculate_padding((), FormatOptions(), measure) is NO_PADDING


def test_comment_column_is_longest_member_plus_indent() -> None:
    fields = members("struct A { 1: i32 x; 2: optional string longer }", FormatOptions())

    padding = calculate_padding(fields, FormatOptions(), measure)

    assert padding.comment == 4 + len("2: optional string longer,")
    assert padding.assign == 0
    assert not padding.columns
    assert padding.owner is fields[0].parent


def test_split_at_assign() -> None:
    (field,) = members("struct A { 1: i32 x = 1, }", FormatOptions(patch_required=False))
    assert isinstance(field, SyntaxNode)

    left, right = split_at_assign(field)

    assert [child.kind for child in left] == [K.FIELD_ID, K.FIELD_TYPE, K.IDENTIFIER]
    assert [child.kind for child in right] == [K.EQUAL, K.CONST_VALUE, K.LIST_SEPARATOR]


def test_assign_padding_columns() -> None:
    options = FormatOptions(align_by_assign=True)
    fields = members("struct Work { 1: i32 num1 = 0; 2: optional string comment }", options)

    padding = calculate_padding(fields, options, measure)

    # "2: optional string comment" is the widest left-hand side.
    assert padding.assign == 4 + 26 + 1
    # "= 0," ends four columns past the assign column.
    assert padding.comment == padding.assign + 4


def test_assign_padding_ignored_for_functions() -> None:
    options = FormatOptions(align_by_assign=True)
    root = parse("service S { void ping(), i32 add(1: i32 a) }").root
    patch(root, options)
    service = root.child(0).child(0)
    assert isinstance(service, SyntaxNode)
    functions = [child for child in service.children if child.kind == K.FUNCTION]

    padding = calculate_padding(functions, options, measure)

    assert padding.assign == 0
    assert padding.comment == 4 + len("i32 add(1: i32 a),")


def test_field_padding_columns() -> None:
    options = FormatOptions(align_by_field=True)
    fields = members("enum E { A = 1, LONGER = 22 }", options)

    padding = calculate_padding(fields, options, measure)

    assert padding.columns == {
        K.IDENTIFIER: 4,
        K.EQUAL: 4 + 6 + 1,
        K.INTEGER_VALUE: 4 + 6 + 1 + 1 + 1,
        K.LIST_SEPARATOR: 4 + 6 + 1 + 1 + 1 + 2,
    }
    assert padding.comment == padding.columns[K.LIST_SEPARATOR] + 1


def test_field_padding_falls_back_when_levels_conflict(caplog: pytest.LogCaptureFixture) -> None:
    options = FormatOptions(align_by_field=True)
    first, second = members("struct A { 1: i32 x, 2: i32 y }", options)
    assert isinstance(second, SyntaxNode)
    # Swap type and name in the second member so the two orders contradict.
    field_type = second.child(2)
    second.remove_child(field_type)
    second.insert_child(3, field_type)

    with caplog.at_level(logging.DEBUG, logger="thriftfmt.format.align"):
        padding = calculate_padding((first, second), options, measure)

    assert not padding.columns
    assert padding.comment == 4 + len("1: required i32 x,")
    assert "Column leveling failed" in caplog.text
