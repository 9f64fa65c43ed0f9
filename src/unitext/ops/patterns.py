"""Byte-level search, splitting and tokenizing.

Matches are found on raw bytes. A well-formed UTF-8 needle always starts on a
code point boundary, so every piece handed back decodes cleanly. Positions are
reported as grapheme ordinals.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from unitext.buffer import TextBuffer, as_bytes
from unitext.index import Unit, count as unit_count, ordinal_at
from unitext.iterators import BoundaryClassifier

from .mutation import TextLike


def _pattern(value: TextLike, operation: str) -> bytes:
    data = as_bytes(value)
    if not data:
        raise ValueError(f"{operation} requires a non-empty pattern")
    return data


def index_of(
    buffer: TextBuffer,
    needle: TextLike,
    *,
    classifier: Optional[BoundaryClassifier] = None,
) -> Optional[int]:
    """Grapheme ordinal of the first match, or ``None``."""

    position = buffer.data.find(as_bytes(needle))
    if position < 0:
        return None
    return ordinal_at(buffer, Unit.GRAPHEME, position, classifier=classifier)


def last_index_of(
    buffer: TextBuffer,
    needle: TextLike,
    *,
    classifier: Optional[BoundaryClassifier] = None,
) -> Optional[int]:
    """Grapheme ordinal of the last match, or ``None``."""

    pattern = as_bytes(needle)
    if not pattern:
        return unit_count(buffer, Unit.GRAPHEME, classifier=classifier)
    position = buffer.data.rfind(pattern)
    if position < 0:
        return None
    return ordinal_at(buffer, Unit.GRAPHEME, position, classifier=classifier)


def contains(buffer: TextBuffer, needle: TextLike) -> bool:
    return as_bytes(needle) in buffer.data


def count(buffer: TextBuffer, needle: TextLike) -> int:
    """Non-overlapping occurrences, scanning left to right."""

    return buffer.data.count(_pattern(needle, "count"))


def starts_with(buffer: TextBuffer, prefix: TextLike) -> bool:
    return buffer.data.startswith(as_bytes(prefix))


def ends_with(buffer: TextBuffer, suffix: TextLike) -> bool:
    return buffer.data.endswith(as_bytes(suffix))


def split_iter(buffer: TextBuffer, separator: TextLike) -> Iterator[str]:
    """Yield the pieces between separators, empty ones included.

    The iterator is bound to the buffer's current generation.
    """

    pattern = _pattern(separator, "split")
    return _pieces(buffer, buffer.data, buffer.generation, pattern)


def _pieces(
    buffer: TextBuffer, content: bytes, generation: int, pattern: bytes
) -> Iterator[str]:
    start = 0
    while True:
        buffer.ensure_generation(generation)
        position = content.find(pattern, start)
        if position < 0:
            yield content[start:].decode("utf-8")
            return
        yield content[start:position].decode("utf-8")
        start = position + len(pattern)


def split(buffer: TextBuffer, separator: TextLike) -> List[str]:
    return list(split_iter(buffer, separator))


def token_iter(buffer: TextBuffer, separator: TextLike) -> Iterator[str]:
    return (piece for piece in split_iter(buffer, separator) if piece)


def tokenize(buffer: TextBuffer, separator: TextLike) -> List[str]:
    return list(token_iter(buffer, separator))


def line_iter(buffer: TextBuffer) -> Iterator[str]:
    """Split on ``\\n`` and drop one trailing ``\\r`` from each line."""

    return (
        line[:-1] if line.endswith("\r") else line
        for line in split_iter(buffer, "\n")
    )


def lines(buffer: TextBuffer) -> List[str]:
    return list(line_iter(buffer))


__all__ = [
    "contains",
    "count",
    "ends_with",
    "index_of",
    "last_index_of",
    "line_iter",
    "lines",
    "split",
    "split_iter",
    "starts_with",
    "token_iter",
    "tokenize",
]
