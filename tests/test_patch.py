import pytest

from thriftfmt.cst import SyntaxNode, SyntaxToken
from thriftfmt.format import (
    FormatOptions,
    patch,
    patch_field_requiredness,
    patch_list_separators,
    patch_remove_last_list_separator,
    walk,
)
from thriftfmt.format.walk import children_of, classify, repeat_children
from thriftfmt.parser import parse
from thriftfmt.syntax import ThriftSyntaxKind as K


def nodes_of(root: SyntaxNode, kind: K) -> list[SyntaxNode]:
    found: list[SyntaxNode] = []

    def visit(element) -> None:
        if isinstance(element, SyntaxNode) and element.kind == kind:
            found.append(element)

    walk(root, visit)
    return found


def test_requiredness_inserted_before_type() -> None:
    root = parse("struct A { 1: i32 x; 2: optional i32 y }").root

    patch_field_requiredness(root)

    first, second = nodes_of(root, K.FIELD)
    requiredness = first.child(1)
    assert isinstance(requiredness, SyntaxNode)
    assert requiredness.kind == K.FIELD_REQ
    assert requiredness.text == "required"
    assert requiredness.child(0).kind == K.REQUIRED_KW
    assert requiredness.descendants_tokens()[0].is_synthetic
    assert second.text == "2:optionali32y"


@pytest.mark.parametrize("keyword", ["union", "exception"])
def test_requiredness_applies_to_union_and_exception(keyword: str) -> None:
    root = parse(f"{keyword} A {{ 1: i32 x }}").root

    patch_field_requiredness(root)

    (field,) = nodes_of(root, K.FIELD)
    assert field.text == "1:requiredi32x"


def test_requiredness_skips_function_parameters() -> None:
    root = parse("service S { void f(1: i32 a) throws (1: E e) }").root

    patch_field_requiredness(root)

    assert [field.text for field in nodes_of(root, K.FIELD)] == ["1:i32a", "1:Ee"]


def test_requiredness_rejects_field_without_type() -> None:
    field = SyntaxNode(kind=K.FIELD, children=[SyntaxToken.synthetic(K.IDENTIFIER, "x")])
    struct = SyntaxNode(kind=K.STRUCT, children=[field])

    with pytest.raises(RuntimeError, match="Field without a type"):
        patch_field_requiredness(struct)


def test_semicolons_are_rewritten_in_place() -> None:
    root = parse("enum E { A = 1; B }").root

    patch_list_separators(root)

    first, second = nodes_of(root, K.ENUM_FIELD)
    separator = first.child(-1)
    assert isinstance(separator, SyntaxNode)
    token = separator.child(0)
    assert isinstance(token, SyntaxToken)
    assert token.kind == K.COMMA
    assert token.text == ","
    assert not token.is_synthetic
    assert token.source is not None and token.source.text == ";"

    appended = second.child(-1)
    assert isinstance(appended, SyntaxNode)
    assert appended.kind == K.LIST_SEPARATOR
    assert appended.descendants_tokens()[0].is_synthetic


def test_separators_added_to_functions_and_parameters() -> None:
    root = parse("service S { void f(1: i32 a, 2: i32 b) void g() }").root

    patch_list_separators(root)

    assert [function.children[-1].kind for function in nodes_of(root, K.FUNCTION)] == [
        K.LIST_SEPARATOR,
        K.LIST_SEPARATOR,
    ]
    assert [field.text for field in nodes_of(root, K.FIELD)] == ["1:i32a,", "2:i32b,"]


def test_last_parameter_separator_removed() -> None:
    root = parse("service S { void f(1: i32 a, 2: i32 b,) throws (1: E e;) }").root

    patch_list_separators(root)
    patch_remove_last_list_separator(root)

    assert [field.text for field in nodes_of(root, K.FIELD)] == ["1:i32a,", "2:i32b", "1:Ee"]


def test_last_annotation_separator_removed() -> None:
    root = parse('typedef i32 T (a = "1", b = "2",)').root

    patch_remove_last_list_separator(root)

    assert [annotation.text for annotation in nodes_of(root, K.TYPE_ANNOTATION)] == ['a="1",', 'b="2"']


def test_struct_members_keep_trailing_separator() -> None:
    root = parse("struct A { 1: i32 x }").root

    patch(root, FormatOptions())

    (field,) = nodes_of(root, K.FIELD)
    assert field.text == "1:requiredi32x,"


def test_disabled_passes_leave_tree_alone() -> None:
    root = parse("struct A { 1: i32 x; }").root

    patch(root, FormatOptions(patch_required=False, patch_separator=False))

    (field,) = nodes_of(root, K.FIELD)
    assert field.text == "1:i32x;"


def test_patch_is_idempotent() -> None:
    root = parse("struct A { 1: i32 x; 2: string y } service S { void f(1: i32 a) }").root

    patch(root, FormatOptions())
    once = root.text
    patch(root, FormatOptions())

    assert root.text == once


def test_walk_visits_every_element_breadth_first() -> None:
    root = parse("enum E { A }").root
    visited: list[K] = []

    walk(root, lambda element: visited.append(element.kind))

    assert visited[:3] == [K.DOCUMENT, K.DEFINITION, K.EOF]
    assert visited.count(K.IDENTIFIER) == 2
    assert len(visited) == 10


def test_repeat_children_splits_leading_run() -> None:
    root = parse("enum E { A, B }").root
    enum = root.child(0).child(0)

    run, rest = repeat_children(enum.children[3:], K.ENUM_FIELD)

    assert [child.kind for child in run] == [K.ENUM_FIELD, K.ENUM_FIELD]
    assert [child.kind for child in rest] == [K.RBRACE]


def test_classify_and_children_of() -> None:
    root = parse("enum E { A }").root
    enum = root.child(0).child(0)
    keyword = enum.child(0)

    assert classify(root) == K.DOCUMENT
    assert classify(enum) == K.ENUM
    assert classify(keyword) == K.ENUM_KW
    assert children_of(keyword) == ()
    assert children_of(enum) == enum.children
