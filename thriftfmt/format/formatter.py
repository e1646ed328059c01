"""Full formatter: patch passes, comment reattachment and alignment."""

import logging
from collections.abc import Sequence

from thriftfmt.cst import SyntaxElement, SyntaxNode, SyntaxToken
from thriftfmt.format.align import ALIGNABLE_KINDS, NO_PADDING, AlignmentPadding, calculate_padding
from thriftfmt.format.comments import comment_text, is_tight, leading_comments, trailing_comment
from thriftfmt.format.options import FormatOptions
from thriftfmt.format.patch import patch
from thriftfmt.format.pure import PureThriftFormatter
from thriftfmt.lexer import Token, TokenKind, TokenStream
from thriftfmt.syntax import ThriftSyntaxKind

logger = logging.getLogger(__name__)


class ThriftFormatter(PureThriftFormatter):
    """Formats one parsed document.

    The tree is patched in place by `format`, so a formatter instance owns
    its tree for the duration of the call.
    """

    def __init__(self, root: SyntaxNode, tokens: TokenStream, options: FormatOptions | None = None) -> None:
        self._options = options if options is not None else FormatOptions()
        super().__init__(self._options.indent)
        self._root = root
        self._tokens = tokens
        self._padding: AlignmentPadding = NO_PADDING
        self._last_token_index = -1

    @property
    def options(self) -> FormatOptions:
        return self._options

    def format(self) -> str:
        patch(self._root, self._options)
        self._padding = NO_PADDING
        self._last_token_index = -1
        out = self.format_node(self._root)
        logger.debug("Formatted document into %d characters", len(out))
        return out

    # -------------------------
    # Hooks
    # -------------------------

    def before_subfields_hook(self, fields: Sequence[SyntaxElement]) -> None:
        # Comment after the opening brace.
        self._tail_comment()
        self._padding = calculate_padding(fields, self._options, self._measure)

    def after_subfields_hook(self, fields: Sequence[SyntaxElement], rest: Sequence[SyntaxElement]) -> None:
        self._padding = NO_PADDING

        closing = rest[0] if rest else None
        if not self._options.keep_comment or not isinstance(closing, SyntaxToken) or closing.source is None:
            return
        # Comments above the closing brace keep the member indentation.
        self._newline()
        self._indent(" " * self._option_indent)
        self._leading_comments(closing.source)
        self._indent()

    def after_block_node_hook(self, node: SyntaxElement) -> None:
        self._tail_comment()

    def before_inline_child_hook(self, node: SyntaxNode, child: SyntaxElement) -> None:
        padding = self._padding
        if padding.owner is None or node.parent is not padding.owner:
            return
        if node.kind not in ALIGNABLE_KINDS:
            return
        if self._newline_c > 0 or self._indent_s:
            return

        if padding.columns:
            target = padding.columns.get(child.kind, 0)
        elif padding.assign and child.kind == ThriftSyntaxKind.EQUAL:
            target = padding.assign
        else:
            return
        self._pad_to(target)

    def terminal_token(self, token: SyntaxToken) -> None:
        if self._newline_c > 0:
            self._tail_comment()
        self._line_comments(token)
        super().terminal_token(token)

    # -------------------------
    # Comments
    # -------------------------

    def _line_comments(self, token: SyntaxToken) -> None:
        if not self._options.keep_comment or token.source is None:
            return

        self._leading_comments(token.source)
        self._last_token_index = token.source.index

    def _leading_comments(self, source: Token) -> None:
        for comment in leading_comments(self._tokens, self._last_token_index, source.index):
            mid_line = self._newline_c == 0 and not self._indent_s and self._current_line_length() > 0
            if mid_line and comment.kind == TokenKind.BLOCK_COMMENT and comment.end_line == source.line:
                # `i32 /* c */ a` stays on one line.
                self._push(comment_text(comment) + " ")
                self._last_token_index = comment.index
                continue
            if mid_line:
                # Inside a one-line construct: the rest continues one level deeper.
                continuation = self._line_indent() + " " * self._option_indent
                if not self._out.endswith(" "):
                    self._append(" ")
            elif comment.kind == TokenKind.BLOCK_COMMENT and comment.index > 0:
                self._newline(2)
            if self._indent_s:
                self._push(self._indent_s)
            self._push(comment_text(comment))
            self._newline(1 if is_tight(comment, source) else 2)
            if mid_line:
                self._indent(continuation)
            self._last_token_index = comment.index

    def _tail_comment(self) -> None:
        if not self._options.keep_comment or self._last_token_index == -1:
            return

        comment = trailing_comment(self._tokens, self._last_token_index)
        if comment is None:
            return

        if self._padding.comment > 0:
            self._pad_to(self._padding.comment)
        self._append(" " + comment_text(comment))
        self._push("")
        self._last_token_index = comment.index

    # -------------------------
    # Alignment
    # -------------------------

    def _pad_to(self, column: int) -> None:
        width = self._current_line_length()
        if column > width:
            self._append(" " * (column - width))

    def _measure(self, element: SyntaxElement, children: Sequence[SyntaxElement] | None) -> str:
        measurer = PureThriftFormatter(self._option_indent)
        if children is None:
            return measurer.format_node(element)
        return measurer.format_children(element, children)
