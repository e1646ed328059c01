"""Helpers to build a CST from parser events."""

from thriftfmt.diagnostics import Diagnostic
from thriftfmt.lexer import TokenStream
from thriftfmt.parser.event import Event, process_events
from thriftfmt.parser.tree_sink import ParsedTree, ThriftTreeSink


def build_tree(
    stream: TokenStream,
    events: list[Event],
    diagnostics: list[Diagnostic],
) -> ParsedTree:
    sink = ThriftTreeSink(stream)
    process_events(sink, events, diagnostics)
    return sink.finish()
