import textwrap

import pytest

from tests._shared_cases import PARSER_CASES, TUTORIAL_FORMATTED, TUTORIAL_SOURCE, ThriftCase, case_id
from thriftfmt.cst import SyntaxNode
from thriftfmt.format import FormatOptions, PureThriftFormatter, ThriftFormatter, format_text
from thriftfmt.parser import parse
from thriftfmt.syntax import ThriftSyntaxKind as K


def dedent(text: str) -> str:
    return textwrap.dedent(text).strip("\n")


def member_lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line.startswith("    ")]


def test_include_whitespace_is_normalized() -> None:
    assert format_text('include    "shared.thrift" ') == 'include "shared.thrift"'


def test_enum_without_separator_patch() -> None:
    source = "enum Numberz { ONE = 1 , TWO , THREE = 3, EIGHT = 8 }"

    output = format_text(source, FormatOptions(patch_separator=False))

    assert output == "enum Numberz {\n    ONE = 1,\n    TWO,\n    THREE = 3,\n    EIGHT = 8\n}"


def test_enum_with_separator_patch() -> None:
    source = "enum Numberz { ONE = 1 , TWO , THREE = 3, EIGHT = 8 }"

    output = format_text(source)

    assert output == "enum Numberz {\n    ONE = 1,\n    TWO,\n    THREE = 3,\n    EIGHT = 8,\n}"


def test_struct_with_comments_and_semicolon() -> None:
    source = "struct Work {\n    1: i32 num1 = 0; // first\n    2: optional string comment // second\n}\n"

    output = format_text(source)

    assert output == dedent(
        """
        struct Work {
            1: required i32 num1 = 0,   // first
            2: optional string comment, // second
        }
        """
    )


def test_align_by_assign() -> None:
    source = "struct Work {\n    1: i32 num1 = 0; // first\n    2: optional string comment // second\n}\n"

    output = format_text(source, FormatOptions(align_by_assign=True))

    first, second = member_lines(output)
    assert first == "    1: required i32 num1       = 0, // first"
    assert second == "    2: optional string comment,     // second"


def test_align_by_assign_keeps_one_column() -> None:
    source = dedent(
        """
        struct Config {
            1: string name = "x"
            2: optional i32 port
            3: bool enabled = true
            4: map<string, string> labels = {}
        }
        """
    )

    output = format_text(source, FormatOptions(align_by_assign=True))

    lines = member_lines(output)
    assign_columns = {line.index("=") for line in lines if "=" in line}
    assert len(assign_columns) == 1
    assert lines[1] == "    2: optional i32 port,"


def test_align_by_field_heterogeneous_members() -> None:
    source = dedent(
        """
        struct Config {
            1: required string name = "x",
            2: optional i32 port,
            3: bool enabled = true
        }
        """
    )

    output = format_text(source, FormatOptions(align_by_field=True))

    lines = member_lines(output)
    assert len(lines) == 3
    assert [line.split()[3] for line in lines] == ["name", "port", "enabled"]
    assert len({line.index("=") for line in lines if "=" in line}) == 1
    assert len({line.rindex(",") for line in lines}) == 1
    assert {line.index(name) for line, name in zip(lines, ["name", "port", "enabled"])} == {23}


def test_align_by_field_wins_over_assign() -> None:
    source = "enum E { A = 1, LONGER = 22 }"

    both = format_text(source, FormatOptions(align_by_field=True, align_by_assign=True))

    assert both == format_text(source, FormatOptions(align_by_field=True))
    assert both == "enum E {\n    A      = 1 ,\n    LONGER = 22,\n}"


def test_tutorial_document() -> None:
    assert format_text(TUTORIAL_SOURCE) == TUTORIAL_FORMATTED


def test_custom_indent() -> None:
    output = format_text("enum E { A, B }", FormatOptions(indent=2))

    assert output == "enum E {\n  A,\n  B,\n}"


def test_requiredness_patch_can_be_disabled() -> None:
    output = format_text("struct A { 1: i32 x }", FormatOptions(patch_required=False))

    assert output == "struct A {\n    1: i32 x,\n}"


def test_separator_patch_disabled_keeps_semicolons() -> None:
    output = format_text("struct A { 1: i32 x; 2: i32 y }", FormatOptions(patch_separator=False))

    assert output == "struct A {\n    1: required i32 x;\n    2: required i32 y\n}"


def test_whitespace_does_not_change_output() -> None:
    compact = "struct  A{1:i32 x;2 :  string   y}"
    sprawling = "struct A {\n\n   1: i32 x;\n\n\t2: string y\n\n}\n\n\n"

    expected = "struct A {\n    1: required i32 x,\n    2: required string y,\n}"
    assert format_text(compact) == expected
    assert format_text(sprawling) == expected


def test_blank_lines_between_kinds() -> None:
    source = 'namespace py a\nnamespace java b\ninclude "x.thrift"\ntypedef i32 T\ntypedef i64 U\nconst i32 C = 1'

    output = format_text(source)

    assert output == dedent(
        """
        namespace py a
        namespace java b

        include "x.thrift"

        typedef i32 T
        typedef i64 U

        const i32 C = 1
        """
    )


def test_containers_are_always_separated_by_blank_line() -> None:
    output = format_text("struct A {} struct B {}")

    assert output == "struct A {\n}\n\nstruct B {\n}"


def test_constant_values() -> None:
    source = "const list<i32> L = [1,2;3]\nconst map<string,list<i32>> M = {'a':[1], 'b':[]}"

    output = format_text(source)

    assert output == "const list<i32> L = [ 1, 2; 3 ]\nconst map<string, list<i32>> M = { 'a': [ 1 ], 'b': [ ] }"


def test_annotations_and_cpp_type() -> None:
    source = 'typedef list<i32> cpp_type "std::vector<int>" IntList (python.immutable = "")'

    output = format_text(source)

    assert output == 'typedef list<i32> cpp_type "std::vector<int>" IntList ( python.immutable = "" )'


def test_service_functions() -> None:
    source = dedent(
        """
        service Base {
            oneway void fire(1: string event);
            async void legacy()
            list<string> names() throws (1: Error e, 2: Other o),
        }

        service Child extends Base {
        }
        """
    )

    output = format_text(source)

    assert output == dedent(
        """
        service Base {
            oneway void fire(1: string event),
            async void legacy(),
            list<string> names() throws(1: Error e, 2: Other o),
        }

        service Child extends Base {
        }
        """
    )


def test_senum_is_dropped() -> None:
    output = format_text('senum Legacy { "a", "b" }\nenum E { A }')

    assert output == "enum E {\n    A,\n}"


def test_empty_document() -> None:
    assert format_text("") == ""


@pytest.mark.parametrize("case", PARSER_CASES, ids=case_id)
@pytest.mark.parametrize(
    "options",
    [
        FormatOptions(),
        FormatOptions(align_by_assign=True),
        FormatOptions(align_by_field=True),
        FormatOptions(patch_required=False, patch_separator=False),
        FormatOptions(keep_comment=False, indent=2),
    ],
    ids=["default", "assign", "field", "no_patch", "no_comment"],
)
def test_formatting_is_idempotent(case: ThriftCase, options: FormatOptions) -> None:
    once = format_text(case.source, options)

    assert format_text(once, options) == once


@pytest.mark.parametrize("case", PARSER_CASES, ids=case_id)
def test_separator_canonicalization(case: ThriftCase) -> None:
    root = parse(format_text(case.source)).root

    def check(node: SyntaxNode) -> None:
        for child in node.child_nodes():
            if child.kind in (K.FIELD, K.ENUM_FIELD, K.FUNCTION) and node.kind not in (K.FUNCTION, K.THROWS_LIST):
                last = child.children[-1]
                assert last.kind == K.LIST_SEPARATOR
                assert last.text == ","
            check(child)

    check(root)


@pytest.mark.parametrize("case", PARSER_CASES, ids=case_id)
def test_requiredness_completion(case: ThriftCase) -> None:
    root = parse(format_text(case.source)).root

    def check(node: SyntaxNode) -> None:
        for child in node.child_nodes():
            if child.kind == K.FIELD and node.kind in (K.STRUCT, K.UNION, K.EXCEPTION):
                assert K.FIELD_REQ in [element.kind for element in child.children]
            check(child)

    check(root)


def test_pure_formatter_has_no_comments() -> None:
    parsed = parse("// c\nenum E { A } // d")

    assert PureThriftFormatter().format_node(parsed.root) == "enum E {\n    A\n}"


def test_pure_formatter_rejects_error_nodes() -> None:
    with pytest.raises(ValueError, match="ERROR"):
        PureThriftFormatter().format_node(SyntaxNode(kind=K.ERROR))


def test_pure_formatter_ignores_non_positive_indent() -> None:
    formatter = PureThriftFormatter(indent=0)

    assert formatter.indent == PureThriftFormatter.DEFAULT_INDENT
    formatter.set_indent(-2)
    assert formatter.indent == PureThriftFormatter.DEFAULT_INDENT


def test_format_children_renders_subset() -> None:
    parsed = parse("struct A { 1: i32 x = 1 }")
    struct = parsed.root.child(0).child(0)
    field = struct.child(3)
    assert isinstance(field, SyntaxNode)

    assert PureThriftFormatter().format_children(field, field.children[:3]) == "1: i32 x"


def test_formatter_state_resets_between_runs() -> None:
    parsed = parse("enum E { A }")
    formatter = ThriftFormatter(parsed.root, parsed.tokens)

    assert formatter.format() == formatter.format()


@pytest.mark.parametrize("indent", [0, -1, True, 2.5])
def test_invalid_indent_rejected(indent: object) -> None:
    with pytest.raises(ValueError):
        FormatOptions(indent=indent)  # type: ignore[arg-type]
