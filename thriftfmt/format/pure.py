"""Comment-free render engine: CST in, canonical Thrift text out."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Final, TypeAlias

from thriftfmt.cst import SyntaxElement, SyntaxNode, SyntaxToken
from thriftfmt.format.options import DEFAULT_INDENT
from thriftfmt.format.walk import is_container_kind, is_eof, is_list_separator, is_token, repeat_children
from thriftfmt.syntax import ThriftSyntaxKind

TightFn: TypeAlias = Callable[[SyntaxElement, SyntaxElement], bool]


@dataclass(frozen=True, slots=True)
class InlineLayout:
    """Children on one line, `join` between neighbours unless `tight(previous, current)`."""

    join: str = " "
    tight: TightFn | None = None

    def separator(self, previous: SyntaxElement, current: SyntaxElement) -> str:
        if not self.join:
            return ""
        if self.tight is not None and self.tight(previous, current):
            return ""
        return self.join


def _before_separator(_: SyntaxElement, current: SyntaxElement) -> bool:
    return is_list_separator(current)


def _spaced(previous: SyntaxElement, current: SyntaxElement) -> bool:
    # `set cpp_type "x" <i32>` must keep its spaces to lex back identically.
    return previous.kind == ThriftSyntaxKind.CPP_TYPE or current.kind in (
        ThriftSyntaxKind.CPP_TYPE,
        ThriftSyntaxKind.TYPE_ANNOTATIONS,
    )


def _type_parameters_tight(previous: SyntaxElement, current: SyntaxElement) -> bool:
    return not _spaced(previous, current)


def _map_type_tight(previous: SyntaxElement, current: SyntaxElement) -> bool:
    return not is_token(previous, ",") and not _spaced(previous, current)


def _signature_tight(previous: SyntaxElement, current: SyntaxElement) -> bool:
    return is_token(current, "(") or is_token(current, ")") or is_token(previous, "(") or is_list_separator(current)


def _map_entry_tight(_: SyntaxElement, current: SyntaxElement) -> bool:
    return is_token(current, ":") or is_list_separator(current)


_SPACED: Final[InlineLayout] = InlineLayout()
_SEPARATED: Final[InlineLayout] = InlineLayout(" ", _before_separator)
_TYPE_PARAMETERS: Final[InlineLayout] = InlineLayout(" ", _type_parameters_tight)
_SIGNATURE: Final[InlineLayout] = InlineLayout(" ", _signature_tight)

_LAYOUTS: Final[dict[ThriftSyntaxKind, InlineLayout]] = {
    ThriftSyntaxKind.FIELD_ID: InlineLayout(""),
    ThriftSyntaxKind.CONTAINER_TYPE: _TYPE_PARAMETERS,
    ThriftSyntaxKind.SET_TYPE: _TYPE_PARAMETERS,
    ThriftSyntaxKind.LIST_TYPE: _TYPE_PARAMETERS,
    ThriftSyntaxKind.MAP_TYPE: InlineLayout(" ", _map_type_tight),
    ThriftSyntaxKind.FUNCTION: _SIGNATURE,
    ThriftSyntaxKind.THROWS_LIST: _SIGNATURE,
    ThriftSyntaxKind.ENUM_FIELD: _SEPARATED,
    ThriftSyntaxKind.FIELD: _SEPARATED,
    ThriftSyntaxKind.TYPE_ANNOTATION: _SEPARATED,
    ThriftSyntaxKind.CONST_LIST: _SEPARATED,
    ThriftSyntaxKind.CONST: _SEPARATED,
    ThriftSyntaxKind.TYPEDEF: _SEPARATED,
    ThriftSyntaxKind.CONST_MAP_ENTRY: InlineLayout(" ", _map_entry_tight),
    ThriftSyntaxKind.INCLUDE: _SPACED,
    ThriftSyntaxKind.CPP_INCLUDE: _SPACED,
    ThriftSyntaxKind.NAMESPACE: _SPACED,
    ThriftSyntaxKind.FIELD_TYPE: _SPACED,
    ThriftSyntaxKind.BASE_TYPE: _SPACED,
    ThriftSyntaxKind.REAL_BASE_TYPE: _SPACED,
    ThriftSyntaxKind.FIELD_REQ: _SPACED,
    ThriftSyntaxKind.ONEWAY: _SPACED,
    ThriftSyntaxKind.FUNCTION_TYPE: _SPACED,
    ThriftSyntaxKind.TYPE_ANNOTATIONS: _SPACED,
    ThriftSyntaxKind.ANNOTATION_VALUE: _SPACED,
    ThriftSyntaxKind.CONST_VALUE: _SPACED,
    ThriftSyntaxKind.INTEGER_VALUE: _SPACED,
    ThriftSyntaxKind.CPP_TYPE: _SPACED,
    ThriftSyntaxKind.CONST_MAP: _SPACED,
    ThriftSyntaxKind.LIST_SEPARATOR: _SPACED,
}


def layout_for(kind: ThriftSyntaxKind) -> InlineLayout:
    layout = _LAYOUTS.get(kind)
    if layout is None:
        raise ValueError(f"No inline layout for node kind {kind.name}")
    return layout


class PureThriftFormatter:
    """Renders a CST without comments or alignment.

    State lives on the instance and is reset by `format_node`; nested
    measurements use a fresh instance.
    """

    DEFAULT_INDENT = DEFAULT_INDENT

    def __init__(self, indent: int = DEFAULT_INDENT) -> None:
        self._option_indent = self.DEFAULT_INDENT
        self.set_indent(indent)
        self._out = ""
        self._newline_c = 0
        self._indent_s = ""

    def format_node(self, node: SyntaxElement) -> str:
        self._reset()
        self.process_node(node)
        return self._out

    def format_children(self, node: SyntaxNode, children: Sequence[SyntaxElement]) -> str:
        """Render a subset of `node`'s children with `node`'s inline layout."""
        self._reset()
        self._inline_children(node, children, layout_for(node.kind))
        return self._out

    def set_indent(self, indent: int) -> None:
        if indent > 0:
            self._option_indent = indent

    @property
    def indent(self) -> int:
        return self._option_indent

    def _reset(self) -> None:
        self._out = ""
        self._newline_c = 0
        self._indent_s = ""

    # -------------------------
    # Output primitives
    # -------------------------

    def _push(self, text: str) -> None:
        if self._newline_c > 0:
            # No line breaks before the first line.
            if self._out:
                self._out += "\n" * self._newline_c
            self._newline_c = 0
        self._out += text

    def _append(self, text: str) -> None:
        self._out += text

    def _newline(self, repeat: int = 1) -> None:
        """Request at least `repeat` line breaks before the next pushed text."""
        if repeat > self._newline_c:
            self._newline_c = repeat

    def _indent(self, indent: str = "") -> None:
        self._indent_s = indent

    def _current_line_length(self) -> int:
        return len(self._out) - (self._out.rfind("\n") + 1)

    def _line_indent(self) -> str:
        line = self._out[self._out.rfind("\n") + 1 :]
        return line[: len(line) - len(line.lstrip(" "))]

    # -------------------------
    # Hooks
    # -------------------------

    def after_block_node_hook(self, node: SyntaxElement) -> None:
        pass

    def before_subfields_hook(self, fields: Sequence[SyntaxElement]) -> None:
        pass

    def after_subfields_hook(self, fields: Sequence[SyntaxElement], rest: Sequence[SyntaxElement]) -> None:
        pass

    def before_inline_child_hook(self, node: SyntaxNode, child: SyntaxElement) -> None:
        pass

    # -------------------------
    # Dispatch
    # -------------------------

    def process_node(self, node: SyntaxElement) -> None:
        if isinstance(node, SyntaxToken):
            self.terminal_token(node)
            return

        match node.kind:
            case ThriftSyntaxKind.DOCUMENT:
                self._block_nodes(node.children)
            case ThriftSyntaxKind.HEADER | ThriftSyntaxKind.DEFINITION:
                self.process_node(node.child(0))
            case ThriftSyntaxKind.ENUM:
                self._subfields(node, 3, ThriftSyntaxKind.ENUM_FIELD)
            case ThriftSyntaxKind.STRUCT | ThriftSyntaxKind.UNION | ThriftSyntaxKind.EXCEPTION:
                self._subfields(node, 3, ThriftSyntaxKind.FIELD)
            case ThriftSyntaxKind.SERVICE:
                start = 5 if len(node) > 2 and is_token(node.child(2), "extends") else 3
                self._subfields(node, start, ThriftSyntaxKind.FUNCTION)
            case ThriftSyntaxKind.SENUM:
                # Deprecated string enums are dropped from the output.
                return
            case kind if kind in _LAYOUTS:
                self._inline_children(node, node.children, _LAYOUTS[kind])
            case kind:
                raise ValueError(f"Unsupported node kind: {kind.name}")

    def terminal_token(self, token: SyntaxToken) -> None:
        if is_eof(token):
            return

        if self._indent_s:
            self._push(self._indent_s)
            self._indent_s = ""

        self._push(token.text)

    # -------------------------
    # Layouts
    # -------------------------

    def _block_nodes(self, nodes: Sequence[SyntaxElement], indent: str = "") -> None:
        last_node: SyntaxElement | None = None
        for node in nodes:
            if node.kind in (ThriftSyntaxKind.HEADER, ThriftSyntaxKind.DEFINITION):
                node = node.child(0)
            if last_node is not None:
                if last_node.kind != node.kind or is_container_kind(node):
                    self._newline(2)
                else:
                    self._newline()

            self._indent(indent)
            self.process_node(node)
            self.after_block_node_hook(node)
            last_node = node

    def _inline_nodes(self, nodes: Sequence[SyntaxElement], join: str = " ") -> None:
        for index, node in enumerate(nodes):
            if index > 0:
                self._push(join)
            self.process_node(node)

    def _inline_children(
        self,
        node: SyntaxNode,
        children: Sequence[SyntaxElement],
        layout: InlineLayout,
    ) -> None:
        previous: SyntaxElement | None = None
        for child in children:
            if previous is not None:
                join = layout.separator(previous, child)
                if join:
                    self._push(join)
            self.before_inline_child_hook(node, child)
            self.process_node(child)
            previous = child

    def _subfields(self, node: SyntaxNode, start: int, member_kind: ThriftSyntaxKind) -> None:
        children = node.children
        self._inline_nodes(children[:start])
        self._newline()

        fields, rest = repeat_children(children[start:], member_kind)

        self.before_subfields_hook(fields)
        self._block_nodes(fields, " " * self._option_indent)
        self.after_subfields_hook(fields, rest)
        self._newline()

        self._inline_nodes(rest)
