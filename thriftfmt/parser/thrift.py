"""High-level parse entrypoint for Thrift source text."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from thriftfmt.diagnostics import collect_diagnostics
from thriftfmt.lexer import tokenize
from thriftfmt.parser.grammar import parse_document
from thriftfmt.parser.parse import build_tree
from thriftfmt.parser.parser import Parser
from thriftfmt.parser.token_source import TokenSource
from thriftfmt.parser.tree_sink import ParsedTree

if TYPE_CHECKING:
    from thriftfmt.pipeline import ThriftParseResult

logger = logging.getLogger(__name__)


def parse(text: str) -> ParsedTree:
    stream, lexer_diagnostics = tokenize(text)
    source = TokenSource(stream)
    parser = Parser(source)

    parse_document(parser)
    events, parser_diagnostics = parser.finish()
    source.finish()
    diagnostics = collect_diagnostics(lexer_diagnostics, parser_diagnostics)
    logger.debug("parsed %d tokens into %d events, %d diagnostics", len(stream), len(events), len(diagnostics))

    return build_tree(stream=stream, events=events, diagnostics=diagnostics)


def parse_result(text: str) -> ThriftParseResult:
    from thriftfmt.pipeline import ThriftParseResult

    return ThriftParseResult(source_text=text, parsed=parse(text))
