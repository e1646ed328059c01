"""Centralized Thrift source cases used across lexer/parser/format tests."""

from __future__ import annotations

import textwrap
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ThriftCase:
    name: str
    source: str
    should_parse_cleanly: bool = True


def _dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip()


TUTORIAL_SOURCE = _dedent(
    """
    include "shared.thrift"

    namespace cpp tutorial
    namespace java tutorial

    typedef i32 MyInteger

    const i32 INT32CONSTANT = 9853
    const map<string,string> MAPCONSTANT = {'hello':'world', 'goodnight':'moon'}

    enum Operation {
      ADD = 1,
      SUBTRACT = 2,
      MULTIPLY = 3,
      DIVIDE = 4
    }

    struct Work {
      1: i32 num1 = 0,
      2: i32 num2,
      3: Operation op,
      4: optional string comment,
    }

    exception InvalidOperation {
      1: i32 whatOp,
      2: string why
    }

    service Calculator extends shared.SharedService {
       void ping(),
       i32 add(1:i32 num1, 2:i32 num2),
       i32 calculate(1:i32 logid, 2:Work w) throws (1:InvalidOperation ouch),
       oneway void zip()
    }
    """
)

TUTORIAL_FORMATTED = _dedent(
    """
    include "shared.thrift"

    namespace cpp tutorial
    namespace java tutorial

    typedef i32 MyInteger

    const i32 INT32CONSTANT = 9853
    const map<string, string> MAPCONSTANT = { 'hello': 'world', 'goodnight': 'moon' }

    enum Operation {
        ADD = 1,
        SUBTRACT = 2,
        MULTIPLY = 3,
        DIVIDE = 4,
    }

    struct Work {
        1: required i32 num1 = 0,
        2: required i32 num2,
        3: required Operation op,
        4: optional string comment,
    }

    exception InvalidOperation {
        1: required i32 whatOp,
        2: required string why,
    }

    service Calculator extends shared.SharedService {
        void ping(),
        i32 add(1: i32 num1, 2: i32 num2),
        i32 calculate(1: i32 logid, 2: Work w) throws(1: InvalidOperation ouch),
        oneway void zip(),
    }
    """
).rstrip("\n")


PARSER_CASES: tuple[ThriftCase, ...] = (
    ThriftCase(name="tutorial", source=TUTORIAL_SOURCE),
    ThriftCase(
        name="annotations",
        source=_dedent(
            """
            typedef string UUID (cpp.type = "std::string")

            struct Annotated {
                1: i32 id (json.name = "ID", min = 0);
                2: list<string> tags = ["a", "b"] (sorted)
            } (final = "true")
            """
        ),
    ),
    ThriftCase(
        name="containers_and_consts",
        source=_dedent(
            """
            const list<i32> PRIMES = [2, 3, 5; 7]
            const map<string, list<i32>> GROUPS = {"a": [1], "b": []}
            const double PI = 3.14159
            const i64 MASK = -0x1F
            const string NAME = 'thrift'
            typedef set<i64> Ids
            typedef map<i32,string> Names;
            """
        ),
    ),
    ThriftCase(
        name="service_shapes",
        source=_dedent(
            """
            service Base {
                oneway void fire(1: string event);
                async void legacy()
                list<string> names() throws (1: Error e, 2: Other o),
            }

            service Child extends Base {
            }
            """
        ),
    ),
    ThriftCase(
        name="header_variants",
        source=_dedent(
            """
            cpp_include "<unordered_map>"
            namespace * example
            namespace py example.py (py.opt = "1")
            php_namespace Example
            """
        ),
    ),
    ThriftCase(
        name="enums_unions_senum",
        source=_dedent(
            """
            enum Flags {
                A = 0x1,
                B = 0x2 (deprecated),
                C
            }
            senum Legacy { "a", "b" }
            union Value {
                1: string s
                2: i64 n
            }
            """
        ),
    ),
    ThriftCase(
        name="comments_everywhere",
        source=_dedent(
            """
            // file header
            /* block
             * doc
             */
            struct Work { // opening
                // about num1
                1: i32 num1 = 0; // first
                2: optional string comment # second
            } // closing

            # trailing file comment
            """
        ),
    ),
    ThriftCase(name="empty_document", source=""),
)


INVALID_CASES: tuple[ThriftCase, ...] = (
    ThriftCase(name="field_without_name", source="struct A { 1: i32 }", should_parse_cleanly=False),
    ThriftCase(name="struct_without_name", source="struct { }", should_parse_cleanly=False),
    ThriftCase(name="enum_value_missing", source="enum E { A = }", should_parse_cleanly=False),
    ThriftCase(name="const_without_value", source="const i32 X = ", should_parse_cleanly=False),
    ThriftCase(name="unclosed_struct", source="struct A { 1: i32 x", should_parse_cleanly=False),
    ThriftCase(name="unclosed_parameters", source="service S { void f( }", should_parse_cleanly=False),
    ThriftCase(name="unterminated_literal", source="include 'shared.thrift", should_parse_cleanly=False),
    ThriftCase(name="stray_character", source="struct A { 1: i32 x @ }", should_parse_cleanly=False),
    ThriftCase(name="top_level_garbage", source="foo\nstruct A {}", should_parse_cleanly=False),
)


ALL_THRIFT_CASES: tuple[ThriftCase, ...] = PARSER_CASES + INVALID_CASES


def case_id(case: ThriftCase) -> str:
    return case.name
