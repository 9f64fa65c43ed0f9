"""Boundary-preserving edits on a ``TextBuffer``.

Every routine builds its complete result before touching the buffer and then
applies a single splice inside ``TextBuffer.edit``. A failure therefore leaves
the buffer exactly as it was.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, List, Optional, Union

from unitext.buffer import AllocationFailure, TextBuffer, as_bytes, encode_scalar
from unitext.buffer.validation import BytesLike
from unitext.index import Unit, resolve_range
from unitext.iterators import (
    BoundaryClassifier,
    CodePointIterator,
    Grapheme,
    GraphemeIterator,
)

from .casing import DEFAULT_CASE_MAPPER, CaseMapper, map_lower, map_title, map_upper

TextLike = Union[str, BytesLike]
Cutset = Union[str, bytes, Iterable[TextLike]]

LINE_TERMINATORS = (b"\r\n", b"\n", b"\r")


def _splice(buffer: TextBuffer, label: str, start: int, end: int, data: bytes) -> None:
    with buffer.edit(label) as tx:
        tx.splice(start, end, data)


def _replace_all(buffer: TextBuffer, label: str, data: bytes) -> bool:
    if data == buffer.data:
        return False
    with buffer.edit(label) as tx:
        tx.replace_all(data)
    return True


def _needle(value: TextLike, operation: str) -> bytes:
    data = as_bytes(value)
    if not data:
        raise ValueError(f"{operation} requires a non-empty needle")
    return data


def insert(
    buffer: TextBuffer,
    text: TextLike,
    index: int,
    *,
    classifier: Optional[BoundaryClassifier] = None,
) -> None:
    """Insert ``text`` before grapheme ``index``; ``index == count`` appends."""

    data = as_bytes(text)
    offset, _ = resolve_range(buffer, Unit.GRAPHEME, index, index, classifier=classifier)
    if data:
        _splice(buffer, "insert", offset, offset, data)


def remove(buffer: TextBuffer, needle: TextLike) -> bool:
    """Drop the first occurrence of ``needle``; report whether one was found."""

    pattern = _needle(needle, "remove")
    position = buffer.data.find(pattern)
    if position < 0:
        return False
    _splice(buffer, "remove", position, position + len(pattern), b"")
    return True


def replace(buffer: TextBuffer, needle: TextLike, replacement: TextLike) -> int:
    """Replace every non-overlapping occurrence, scanning the original text once."""

    pattern = _needle(needle, "replace")
    substitute = as_bytes(replacement)
    content = buffer.data
    occurrences = content.count(pattern)
    if occurrences:
        _splice(buffer, "replace", 0, len(content), content.replace(pattern, substitute))
    return occurrences


def reverse(buffer: TextBuffer) -> None:
    """Reverse code point order, keeping each code point's bytes intact.

    A base letter followed by a separate combining mark ends up with the mark
    in front of it; only precomposed characters survive unchanged.
    """

    points = list(CodePointIterator(buffer))
    content = buffer.data
    _replace_all(
        buffer,
        "reverse",
        b"".join(content[point.offset : point.end] for point in reversed(points)),
    )


def _cut_entries(
    cutset: Cutset, classifier: Optional[BoundaryClassifier]
) -> FrozenSet[bytes]:
    if isinstance(cutset, (str, bytes, bytearray)):
        source = TextBuffer.from_bytes(as_bytes(cutset))
        return frozenset(
            grapheme.data for grapheme in GraphemeIterator(source, classifier=classifier)
        )
    return frozenset(as_bytes(entry) for entry in cutset)


def _trim(
    buffer: TextBuffer,
    cutset: Cutset,
    *,
    left: bool,
    right: bool,
    classifier: Optional[BoundaryClassifier],
) -> None:
    cut = _cut_entries(cutset, classifier)
    graphemes: List[Grapheme] = list(GraphemeIterator(buffer, classifier=classifier))
    first, last = 0, len(graphemes)
    if left:
        while first < last and graphemes[first].data in cut:
            first += 1
    if right:
        while last > first and graphemes[last - 1].data in cut:
            last -= 1
    start = graphemes[first].offset if first < len(graphemes) else len(buffer)
    end = graphemes[last - 1].end if last > first else start
    if start == 0 and end == len(buffer):
        return
    _splice(buffer, "trim", 0, len(buffer), buffer.data[start:end])


def trim(
    buffer: TextBuffer,
    cutset: Cutset = " ",
    *,
    classifier: Optional[BoundaryClassifier] = None,
) -> None:
    """Strip leading and trailing graphemes found in ``cutset``.

    A string cutset contributes each of its graphemes; any other iterable
    contributes each element whole.
    """

    _trim(buffer, cutset, left=True, right=True, classifier=classifier)


def trim_left(
    buffer: TextBuffer,
    cutset: Cutset = " ",
    *,
    classifier: Optional[BoundaryClassifier] = None,
) -> None:
    _trim(buffer, cutset, left=True, right=False, classifier=classifier)


def trim_right(
    buffer: TextBuffer,
    cutset: Cutset = " ",
    *,
    classifier: Optional[BoundaryClassifier] = None,
) -> None:
    _trim(buffer, cutset, left=False, right=True, classifier=classifier)


def concat(buffer: TextBuffer, text: TextLike) -> None:
    data = as_bytes(text)
    if data:
        _splice(buffer, "concat", len(buffer), len(buffer), data)


def concat_all(buffer: TextBuffer, texts: Iterable[TextLike]) -> None:
    data = b"".join(as_bytes(text) for text in texts)
    if data:
        _splice(buffer, "concat_all", len(buffer), len(buffer), data)


def append(buffer: TextBuffer, *scalars: int) -> None:
    """Append code points given as scalar values."""

    data = b"".join(encode_scalar(scalar) for scalar in scalars)
    if data:
        _splice(buffer, "append", len(buffer), len(buffer), data)


def repeat(buffer: TextBuffer, times: int) -> None:
    if times < 0:
        raise ValueError(f"repeat count must be non-negative, got {times}")
    if times == 1 or not len(buffer):
        return
    content = buffer.data
    try:
        repeated = content * times
    except (MemoryError, OverflowError) as exc:
        raise AllocationFailure(
            f"Cannot repeat {len(content)} bytes {times} times",
            requested=len(content) * times,
        ) from exc
    _splice(buffer, "repeat", 0, len(content), repeated)


def to_lower(buffer: TextBuffer, mapper: CaseMapper = DEFAULT_CASE_MAPPER) -> None:
    scalars = [point.scalar for point in CodePointIterator(buffer)]
    _replace_all(buffer, "to_lower", map_lower(scalars, mapper).encode("utf-8"))


def to_upper(buffer: TextBuffer, mapper: CaseMapper = DEFAULT_CASE_MAPPER) -> None:
    scalars = [point.scalar for point in CodePointIterator(buffer)]
    _replace_all(buffer, "to_upper", map_upper(scalars, mapper).encode("utf-8"))


def to_title(buffer: TextBuffer, mapper: CaseMapper = DEFAULT_CASE_MAPPER) -> None:
    scalars = [point.scalar for point in CodePointIterator(buffer)]
    _replace_all(buffer, "to_title", map_title(scalars, mapper).encode("utf-8"))


def is_lower(buffer: TextBuffer, mapper: CaseMapper = DEFAULT_CASE_MAPPER) -> bool:
    return all(
        mapper.lower(point.scalar) == point.char for point in CodePointIterator(buffer)
    )


def is_upper(buffer: TextBuffer, mapper: CaseMapper = DEFAULT_CASE_MAPPER) -> bool:
    return all(
        mapper.upper(point.scalar) == point.char for point in CodePointIterator(buffer)
    )


def chomp(buffer: TextBuffer) -> bool:
    """Remove one trailing ``\\r\\n``, ``\\n`` or ``\\r``; report whether one was removed."""

    content = buffer.data
    for terminator in LINE_TERMINATORS:
        if content.endswith(terminator):
            _splice(buffer, "chomp", len(content) - len(terminator), len(content), b"")
            return True
    return False


__all__ = [
    "append",
    "chomp",
    "concat",
    "concat_all",
    "insert",
    "is_lower",
    "is_upper",
    "remove",
    "repeat",
    "replace",
    "reverse",
    "to_lower",
    "to_title",
    "to_upper",
    "trim",
    "trim_left",
    "trim_right",
]
