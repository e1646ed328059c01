"""Parser events."""

from dataclasses import dataclass
from typing import Protocol

from thriftfmt.diagnostics import Diagnostic
from thriftfmt.syntax import ThriftSyntaxKind


@dataclass(frozen=True, slots=True)
class StartEvent:
    kind: ThriftSyntaxKind | None = None

    @staticmethod
    def tombstone() -> "StartEvent":
        return StartEvent(kind=None)

    @property
    def is_tombstone(self) -> bool:
        return self.kind is None


@dataclass(frozen=True, slots=True)
class FinishEvent:
    pass


@dataclass(frozen=True, slots=True)
class TokenEvent:
    kind: ThriftSyntaxKind
    index: int


Event = StartEvent | FinishEvent | TokenEvent


class TreeSink(Protocol):
    def token(self, kind: ThriftSyntaxKind, index: int) -> None: ...

    def start_node(self, kind: ThriftSyntaxKind) -> None: ...

    def finish_node(self) -> None: ...

    def errors(self, errors: list[Diagnostic]) -> None: ...


def process_events(
    sink: TreeSink,
    events: list[Event],
    errors: list[Diagnostic],
) -> None:
    sink.errors(errors)

    for event in events:
        match event:
            case StartEvent(kind=None):
                continue
            case StartEvent(kind=kind):
                sink.start_node(kind)
            case FinishEvent():
                sink.finish_node()
            case TokenEvent(kind=kind, index=index):
                sink.token(kind, index)
