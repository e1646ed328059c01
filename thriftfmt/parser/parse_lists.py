"""Reusable node-list parse loop."""

from collections.abc import Callable
from dataclasses import dataclass

from thriftfmt.lexer import TokenKind
from thriftfmt.parser.parser import Parser, ParserProgress


@dataclass(slots=True)
class ParseNodeList:
    """Parse a run of sibling elements in place, with progress and recovery hooks.

    Thrift lists (fields, enum values, functions, annotations) are direct
    children of their owner node, so unlike Biome-style list parsing this loop
    does not wrap the elements in a list node of its own.
    """

    is_at_list_end: Callable[[Parser], bool]
    parse_element: Callable[[Parser], bool]
    recover: Callable[[Parser, bool], bool]

    def parse_list(self, parser: Parser) -> int:
        progress = ParserProgress()
        count = 0

        while not parser.at(TokenKind.EOF) and not self.is_at_list_end(parser):
            progress.assert_progressing(parser)
            parsed = self.parse_element(parser)
            if parsed:
                count += 1
            if not self.recover(parser, parsed):
                break

        return count
