"""Parser infrastructure (token source + event-based parser + tree sink)."""

from thriftfmt.parser.event import (
    Event,
    FinishEvent,
    StartEvent,
    TokenEvent,
    process_events,
)
from thriftfmt.parser.grammar import parse_document
from thriftfmt.parser.marker import CompletedMarker, Marker
from thriftfmt.parser.parse import build_tree
from thriftfmt.parser.parse_lists import ParseNodeList
from thriftfmt.parser.parse_recovery import ParseRecoveryTokenSet, RecoveryError
from thriftfmt.parser.parser import Parser, ParserProgress
from thriftfmt.parser.thrift import parse, parse_result
from thriftfmt.parser.token_source import TokenSource
from thriftfmt.parser.tree_sink import ParsedTree, ThriftTreeSink

__all__ = [
    "CompletedMarker",
    "Event",
    "FinishEvent",
    "Marker",
    "ParseNodeList",
    "ParseRecoveryTokenSet",
    "ParsedTree",
    "Parser",
    "ParserProgress",
    "RecoveryError",
    "StartEvent",
    "ThriftTreeSink",
    "TokenEvent",
    "TokenSource",
    "build_tree",
    "parse",
    "parse_document",
    "parse_result",
    "process_events",
]
