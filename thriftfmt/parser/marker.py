"""Markers for event-based parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from thriftfmt.parser.event import FinishEvent, StartEvent
from thriftfmt.syntax import ThriftSyntaxKind
from thriftfmt.text import TextSize

if TYPE_CHECKING:
    from thriftfmt.parser.parser import Parser


@dataclass(slots=True)
class Marker:
    pos: int
    start: TextSize

    def complete(self, parser: Parser, kind: ThriftSyntaxKind) -> CompletedMarker:
        event = parser.events[self.pos]
        if not isinstance(event, StartEvent):
            raise RuntimeError("Marker must point to a StartEvent")
        parser.events[self.pos] = StartEvent(kind=kind)

        finish_pos = len(parser.events)
        parser.events.append(FinishEvent())
        return CompletedMarker(start_pos=self.pos, finish_pos=finish_pos, offset=self.start)

    def abandon(self, parser: Parser) -> None:
        # A trailing start event can simply be dropped; otherwise it stays a
        # tombstone and is skipped when the events are replayed.
        if self.pos == len(parser.events) - 1:
            parser.events.pop()


@dataclass(frozen=True, slots=True)
class CompletedMarker:
    start_pos: int
    finish_pos: int
    offset: TextSize

    def kind(self, parser: Parser) -> ThriftSyntaxKind:
        event = parser.events[self.start_pos]
        if not isinstance(event, StartEvent) or event.kind is None:
            raise RuntimeError("CompletedMarker points to non-start event")
        return event.kind

    def change_kind(self, parser: Parser, new_kind: ThriftSyntaxKind) -> None:
        event = parser.events[self.start_pos]
        if not isinstance(event, StartEvent):
            raise RuntimeError("CompletedMarker points to non-start event")
        parser.events[self.start_pos] = StartEvent(kind=new_kind)
