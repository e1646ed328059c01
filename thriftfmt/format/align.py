"""Column computation for member blocks (enum values, struct fields)."""

import logging
from collections.abc import Callable, Hashable, Mapping, Sequence
from dataclasses import dataclass, field
from itertools import pairwise
from typing import TypeAlias

from thriftfmt.cst import SyntaxElement, SyntaxNode
from thriftfmt.format.options import FormatOptions
from thriftfmt.format.walk import is_list_separator
from thriftfmt.syntax import ThriftSyntaxKind

logger = logging.getLogger(__name__)

Measure: TypeAlias = Callable[[SyntaxElement, Sequence[SyntaxElement] | None], str]
"""Renders an element (or a subset of a node's children) on a single line."""

ALIGNABLE_KINDS = frozenset({ThriftSyntaxKind.FIELD, ThriftSyntaxKind.ENUM_FIELD})


@dataclass(frozen=True, slots=True)
class AlignmentPadding:
    """Target columns for one member block.

    `comment` is the column trailing comments are padded to; `assign` the
    column of `=` in assign mode; `columns` maps each child kind to its start
    column in field mode. Zero/empty means "no padding".
    """

    comment: int = 0
    assign: int = 0
    columns: Mapping[ThriftSyntaxKind, int] = field(default_factory=dict)
    owner: SyntaxNode | None = None


NO_PADDING = AlignmentPadding()


def calculate_padding(
    members: Sequence[SyntaxElement],
    options: FormatOptions,
    measure: Measure,
) -> AlignmentPadding:
    if not members:
        return NO_PADDING

    owner = members[0].parent
    indent = options.indent
    alignable = members[0].kind in ALIGNABLE_KINDS

    if alignable and options.align_by_field:
        padding = _field_padding(members, indent, measure, owner)
        if padding is not None:
            return padding
        logger.debug("Column leveling failed for %d members; keeping comment alignment only", len(members))
    elif alignable and options.align_by_assign:
        return _assign_padding(members, indent, measure, owner)

    width = max(len(measure(member, None)) for member in members)
    return AlignmentPadding(comment=width + indent, owner=owner)


def split_at_assign(member: SyntaxNode) -> tuple[tuple[SyntaxElement, ...], tuple[SyntaxElement, ...]]:
    """Split a member before its `=` token, or before its separator if it has none."""
    children = member.children
    for index, child in enumerate(children):
        if child.kind == ThriftSyntaxKind.EQUAL or is_list_separator(child):
            return children[:index], children[index:]
    return children, ()


def _assign_padding(
    members: Sequence[SyntaxElement],
    indent: int,
    measure: Measure,
    owner: SyntaxNode | None,
) -> AlignmentPadding:
    parts: list[tuple[int, int, bool]] = []
    for member in members:
        left, right = split_at_assign(member)
        left_width = len(measure(member, left))
        right_width = len(measure(member, right)) if right else 0
        has_assign = bool(right) and right[0].kind == ThriftSyntaxKind.EQUAL
        parts.append((left_width, right_width, has_assign))

    assign = indent + max(left_width for left_width, _, _ in parts) + 1

    ends = []
    for left_width, right_width, has_assign in parts:
        if has_assign:
            ends.append(assign + right_width)
        else:
            ends.append(indent + left_width + right_width)

    return AlignmentPadding(comment=max(ends), assign=assign, owner=owner)


def _field_padding(
    members: Sequence[SyntaxElement],
    indent: int,
    measure: Measure,
    owner: SyntaxNode | None,
) -> AlignmentPadding | None:
    """Column starts per child kind, or None when the kinds cannot be leveled.

    Parsed fields and enum values never repeat a child kind and always list
    their kinds in grammar order, so leveling only fails on trees edited
    after parsing.
    """
    sequences = [[child.kind for child in member.children] for member in members]
    levels = assign_column_levels(sequences)
    if not levels:
        return None

    widths = [0] * (max(levels.values()) + 1)
    for member in members:
        for child in member.children:
            level = levels[child.kind]
            widths[level] = max(widths[level], len(measure(child, None)))

    starts = [indent]
    for width in widths[:-1]:
        starts.append(starts[-1] + width + 1)

    columns: dict[ThriftSyntaxKind, int] = {}
    comment = 0
    for kind, level in levels.items():
        start = starts[level]
        if kind == ThriftSyntaxKind.LIST_SEPARATOR:
            # Separators hug the widest element before them.
            start -= 1
        columns[kind] = start
        comment = max(comment, start + widths[level])

    return AlignmentPadding(comment=comment, columns=columns, owner=owner)


def assign_column_levels(sequences: Sequence[Sequence[Hashable]]) -> dict[Hashable, int] | None:
    """Give every identity a column so that each sequence reads left to right.

    Levels start at zero and are raised until every identity sits one past
    the identity before it in any sequence. Returns None when that cannot
    settle (an identity repeats within a sequence or the order is cyclic)
    or when the resulting levels leave a gap.
    """
    levels: dict[Hashable, int] = {}
    for sequence in sequences:
        if len(set(sequence)) != len(sequence):
            return None
        for identity in sequence:
            levels.setdefault(identity, 0)

    for _ in range(len(levels) + 1):
        changed = False
        for sequence in sequences:
            for previous, current in pairwise(sequence):
                if levels[current] < levels[previous] + 1:
                    levels[current] = levels[previous] + 1
                    changed = True
        if not changed:
            break
    else:
        return None

    if levels and set(levels.values()) != set(range(max(levels.values()) + 1)):
        return None
    return levels
