"""Translation between logical ordinals and byte offsets.

Nothing here is cached: every call replays the relevant iterator over the
buffer's current bytes, so results can never refer to a previous edit.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Iterator, Optional, Tuple

from unitext.buffer import IndexOutOfRange, TextBuffer
from unitext.iterators import BoundaryClassifier, CodePointIterator, GraphemeIterator


class Unit(str, Enum):
    """Granularity an index is expressed in."""

    BYTE = "byte"
    CODE_POINT = "code_point"
    GRAPHEME = "grapheme"


@dataclass(frozen=True, slots=True)
class Span:
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


def iter_spans(
    buffer: TextBuffer,
    unit: Unit,
    *,
    classifier: Optional[BoundaryClassifier] = None,
) -> Iterator[Span]:
    if unit is Unit.BYTE:
        for offset in range(len(buffer)):
            yield Span(offset, 1)
    elif unit is Unit.CODE_POINT:
        for point in CodePointIterator(buffer):
            yield Span(point.offset, point.length)
    else:
        for grapheme in GraphemeIterator(buffer, classifier=classifier):
            yield Span(grapheme.offset, grapheme.length)


def count(
    buffer: TextBuffer,
    unit: Unit,
    *,
    classifier: Optional[BoundaryClassifier] = None,
) -> int:
    if unit is Unit.BYTE:
        return len(buffer)
    return sum(1 for _ in iter_spans(buffer, unit, classifier=classifier))


def normalize(index: int, total: int) -> int:
    """Map a possibly negative index onto ``0..total``."""

    return total + index if index < 0 else index


def resolve(
    buffer: TextBuffer,
    unit: Unit,
    index: int,
    *,
    classifier: Optional[BoundaryClassifier] = None,
) -> Span:
    """Return the byte span of the ``index``-th unit (negative counts from the end)."""

    if unit is Unit.BYTE:
        total = len(buffer)
        position = normalize(index, total)
        if not 0 <= position < total:
            raise _out_of_range(unit, index, total)
        return Span(position, 1)

    if index >= 0:
        seen = 0
        for seen, span in enumerate(iter_spans(buffer, unit, classifier=classifier), 1):
            if seen - 1 == index:
                return span
        raise _out_of_range(unit, index, seen)

    trailing: Deque[Span] = deque(maxlen=-index)
    seen = 0
    for span in iter_spans(buffer, unit, classifier=classifier):
        trailing.append(span)
        seen += 1
    if seen < -index:
        raise _out_of_range(unit, index, seen)
    return trailing[0]


def resolve_range(
    buffer: TextBuffer,
    unit: Unit,
    start: int,
    end: Optional[int] = None,
    *,
    classifier: Optional[BoundaryClassifier] = None,
) -> Tuple[int, int]:
    """Return ``(byte_start, byte_end)`` for units ``[start, end)``.

    ``end`` defaults to the unit count; both ends may be negative.
    """

    total = count(buffer, unit, classifier=classifier)
    first = normalize(start, total)
    last = total if end is None else normalize(end, total)
    if not 0 <= first <= total:
        raise _out_of_range(unit, start, total)
    if not 0 <= last <= total:
        raise _out_of_range(unit, end if end is not None else total, total)
    if first > last:
        raise IndexOutOfRange(
            f"Range start {start} is after end {end}", index=start, count=total
        )
    if unit is Unit.BYTE:
        return first, last

    byte_start = byte_end = len(buffer)
    for ordinal, span in enumerate(iter_spans(buffer, unit, classifier=classifier)):
        if ordinal == first:
            byte_start = span.offset
        if ordinal == last:
            byte_end = span.offset
            break
    return byte_start, byte_end


def ordinal_at(
    buffer: TextBuffer,
    unit: Unit,
    byte_offset: int,
    *,
    classifier: Optional[BoundaryClassifier] = None,
) -> int:
    """Return the ordinal of the unit containing ``byte_offset``.

    ``byte_offset == len(buffer)`` maps to the unit count.
    """

    if not 0 <= byte_offset <= len(buffer):
        raise IndexOutOfRange(
            f"Byte offset {byte_offset} outside buffer of {len(buffer)}",
            index=byte_offset,
            count=len(buffer),
        )
    if unit is Unit.BYTE:
        return byte_offset
    seen = 0
    for seen, span in enumerate(iter_spans(buffer, unit, classifier=classifier), 1):
        if span.end > byte_offset:
            return seen - 1
    return seen


def _out_of_range(unit: Unit, index: int, total: int) -> IndexOutOfRange:
    return IndexOutOfRange(
        f"{unit.value} index {index} out of range for {total} units",
        index=index,
        count=total,
    )


__all__ = [
    "Span",
    "Unit",
    "count",
    "iter_spans",
    "normalize",
    "ordinal_at",
    "resolve",
    "resolve_range",
]
