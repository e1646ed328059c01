from bisect import bisect_right
from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True, order=True)
class TextSize:
    """Opaque measure of text length / index into text."""

    value: int

    def __post_init__(self):
        if self.value < 0:
            raise ValueError("TextSize cannot be negative")

    @staticmethod
    def of(text: str) -> "TextSize":
        """Create a TextSize from a string's length."""
        return TextSize(len(text))

    @staticmethod
    def from_int(value: int) -> "TextSize":
        """Create a TextSize from an integer."""
        return TextSize(value)

    def to_int(self) -> int:
        """Convert the TextSize to an integer."""
        return self.value

    def __add__(self, other: "TextSize") -> "TextSize":
        return TextSize(self.value + other.value)

    def __sub__(self, other: "TextSize") -> "TextSize":
        result = self.value - other.value
        if result < 0:
            raise ValueError("Resulting TextSize cannot be negative")
        return TextSize(result)

    def __repr__(self) -> str:
        return f"TextSize({self.value})"


ZERO: Final[TextSize] = TextSize(0)
"""Constant representing a TextSize of zero."""


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """
    Half-open range [start, end) in text, represented by TextSize offsets.

    Invariant:
    - 0 <= start <= end
    """

    _start: int
    _end: int

    def __post_init__(self):
        if self._start < 0 or self._end < 0:
            raise ValueError("TextRange positions cannot be negative")
        if self._start > self._end:
            raise ValueError("TextRange invariant violated: start > end")

    @staticmethod
    def new(start: TextSize, end: TextSize) -> "TextRange":
        """Create a TextRange from start and end TextSizes."""
        return TextRange(start.value, end.value)

    @staticmethod
    def empty(offset: TextSize) -> "TextRange":
        """Create an empty TextRange at the given offset."""
        return TextRange(offset.value, offset.value)

    @property
    def start(self) -> TextSize:
        """Get the start offset as a TextSize."""
        return TextSize(self._start)

    @property
    def end(self) -> TextSize:
        """Get the end offset as a TextSize."""
        return TextSize(self._end)

    def len(self) -> TextSize:
        """Get the length of the range as a TextSize."""
        return TextSize(self._end - self._start)

    def is_empty(self) -> bool:
        """Check if the range is empty."""
        return self._start == self._end

    def as_tuple(self) -> tuple[int, int]:
        """Get the range as a tuple of (start, end) integers."""
        return (self._start, self._end)

    def contains(self, offset: TextSize) -> bool:
        """Check if the range contains the given offset."""
        return self._start <= offset.value < self._end

    def __repr__(self) -> str:
        return f"TextRange({self._start}, {self._end})"


def slice_text_range(source: str, range: TextRange) -> str:
    """Get the substring of the source text covered by the given TextRange.

    Coord system matches python string indices so we can just do this.
    """
    return source[range.start.value : range.end.value]


class LineIndex:
    """Maps text offsets to 1-based line and column numbers.

    `\\n`, `\\r\\n` and a lone `\\r` each end a line, as in the lexer.
    """

    __slots__ = ("_line_starts",)

    def __init__(self, text: str) -> None:
        starts = [0]
        for offset, ch in enumerate(text):
            if ch == "\n" or (ch == "\r" and text[offset + 1 : offset + 2] != "\n"):
                starts.append(offset + 1)
        self._line_starts = tuple(starts)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_number(self, offset: TextSize) -> int:
        return bisect_right(self._line_starts, offset.value)

    def line_col(self, offset: TextSize) -> tuple[int, int]:
        line = self.line_number(offset)
        return line, offset.value - self._line_starts[line - 1] + 1
