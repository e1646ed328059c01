"""Formatter configuration."""

from dataclasses import dataclass
from typing import Final

DEFAULT_INDENT: Final[int] = 4


@dataclass(frozen=True, slots=True)
class FormatOptions:
    """Plain options record consumed by the formatter.

    `align_by_field` wins over `align_by_assign` when both are set.
    """

    indent: int = DEFAULT_INDENT
    patch_required: bool = True
    patch_separator: bool = True
    keep_comment: bool = True
    align_by_assign: bool = False
    align_by_field: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise ValueError(f"indent must be an integer, got {self.indent!r}")
        if self.indent <= 0:
            raise ValueError(f"indent must be positive, got {self.indent}")
