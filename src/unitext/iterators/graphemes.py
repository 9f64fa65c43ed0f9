"""Grouping of code points into grapheme clusters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

from unitext.buffer import TextBuffer

from .classifiers import BoundaryClassifier, BoundaryContext, get_classifier
from .codepoints import CodePointIterator


@dataclass(frozen=True, slots=True)
class Grapheme:
    """A user-perceived character: one or more whole code points."""

    offset: int
    length: int
    data: bytes

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def text(self) -> str:
        return self.data.decode("utf-8")

    def __str__(self) -> str:
        return self.text


class GraphemeIterator(Iterator[Grapheme]):
    """Forward-only cluster iterator over a ``TextBuffer``.

    Shares the generation check of the underlying ``CodePointIterator``.
    """

    def __init__(
        self,
        buffer: TextBuffer,
        *,
        classifier: Optional[BoundaryClassifier] = None,
        offset: int = 0,
    ) -> None:
        self.buffer = buffer
        self.classifier = classifier or get_classifier()
        self._points = CodePointIterator(buffer, offset)
        self._data = self._points.data

    def __iter__(self) -> "GraphemeIterator":
        return self

    def __next__(self) -> Grapheme:
        first = next(self._points)
        cluster = [first.scalar]
        end = first.end
        while True:
            following = self._points.peek()
            if following is None:
                break
            context = BoundaryContext(cluster=tuple(cluster), current=following.scalar)
            if self.classifier.is_boundary(context):
                break
            next(self._points)
            cluster.append(following.scalar)
            end = following.end
        return Grapheme(
            offset=first.offset,
            length=end - first.offset,
            data=self._data[first.offset : end],
        )


def segment(
    data: bytes, classifier: Optional[BoundaryClassifier] = None
) -> List[int]:
    """Return the byte offset at which each grapheme cluster of ``data`` starts."""

    buffer = TextBuffer.from_bytes(data)
    return [grapheme.offset for grapheme in GraphemeIterator(buffer, classifier=classifier)]


__all__ = ["Grapheme", "GraphemeIterator", "segment"]
