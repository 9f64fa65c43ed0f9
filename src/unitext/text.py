"""High-level text façade combining buffer, iterators, index translation and ops."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Union

from unitext.buffer import TextBuffer, as_bytes
from unitext.buffer.validation import BytesLike
from unitext.index import Unit, count, resolve, resolve_range
from unitext.iterators import (
    BoundaryClassifier,
    CodePointIterator,
    Grapheme,
    GraphemeIterator,
    get_classifier,
)
from unitext.ops import mutation, parsing, patterns
from unitext.ops.casing import DEFAULT_CASE_MAPPER, CaseMapper
from unitext.ops.mutation import Cutset, TextLike


class Text:
    """A UTF-8 string addressable by byte, code point or grapheme.

    Indices may be negative (``-1`` is the last unit). Edits go through a
    single splice on the underlying ``TextBuffer`` and invalidate any
    iterator created before them.
    """

    def __init__(
        self,
        content: Union[str, BytesLike, TextBuffer] = "",
        *,
        classifier: Optional[BoundaryClassifier] = None,
        case_mapper: Optional[CaseMapper] = None,
        name: str = "text",
    ) -> None:
        if isinstance(content, TextBuffer):
            self.buffer = content
        else:
            self.buffer = TextBuffer(bytearray(as_bytes(content)), name=name, validate=False)
        self.classifier = classifier or get_classifier()
        self.case_mapper = case_mapper or DEFAULT_CASE_MAPPER

    # -- construction ----------------------------------------------------

    @classmethod
    def from_bytes(cls, data: BytesLike, **options) -> "Text":
        """Borrow ``data``; it is copied only when the text is first edited."""

        return cls(TextBuffer.from_bytes(data, name=options.pop("name", "text")), **options)

    @classmethod
    def from_owned_bytes(cls, data: BytesLike, **options) -> "Text":
        return cls(
            TextBuffer.from_owned_bytes(data, name=options.pop("name", "text")), **options
        )

    @classmethod
    def from_code_points(cls, scalars: Iterable[int], **options) -> "Text":
        return cls(
            TextBuffer.from_code_points(scalars, name=options.pop("name", "text")),
            **options,
        )

    @classmethod
    def from_joined(
        cls, parts: Iterable[TextLike], separator: TextLike = "", **options
    ) -> "Text":
        return cls(
            TextBuffer.from_joined(parts, separator, name=options.pop("name", "text")),
            **options,
        )

    def copy(self) -> "Text":
        return Text(
            self.buffer.copy(), classifier=self.classifier, case_mapper=self.case_mapper
        )

    # -- lifecycle -------------------------------------------------------

    def release(self) -> None:
        self.buffer.release()

    def reset(self, content: TextLike) -> None:
        with self.buffer.edit("reset") as tx:
            tx.reset(content)

    def to_owned_slice(self) -> bytearray:
        return self.buffer.to_owned_slice()

    def __enter__(self) -> "Text":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.release()
        return False

    # -- counts & predicates ---------------------------------------------

    def byte_count(self) -> int:
        return len(self.buffer)

    def code_point_count(self) -> int:
        return count(self.buffer, Unit.CODE_POINT)

    def grapheme_count(self) -> int:
        return count(self.buffer, Unit.GRAPHEME, classifier=self.classifier)

    def is_empty(self) -> bool:
        return not len(self.buffer)

    def is_ascii(self) -> bool:
        return self.buffer.data.isascii()

    def is_blank(self) -> bool:
        return all(point.char.isspace() for point in self.code_point_iter())

    def is_lower(self) -> bool:
        return mutation.is_lower(self.buffer, self.case_mapper)

    def is_upper(self) -> bool:
        return mutation.is_upper(self.buffer, self.case_mapper)

    def same_as(self, other: Union["Text", TextLike]) -> bool:
        """Byte-for-byte equality."""

        if isinstance(other, Text):
            return self.buffer.data == other.buffer.data
        return self.buffer.data == as_bytes(other)

    # -- iteration -------------------------------------------------------

    def code_point_iter(self) -> CodePointIterator:
        return CodePointIterator(self.buffer)

    def grapheme_iter(self) -> GraphemeIterator:
        return GraphemeIterator(self.buffer, classifier=self.classifier)

    def code_points(self) -> List[int]:
        return [point.scalar for point in self.code_point_iter()]

    def graphemes(self) -> List[str]:
        return [grapheme.text for grapheme in self.grapheme_iter()]

    # -- indexed access --------------------------------------------------

    def byte_at(self, index: int) -> int:
        span = resolve(self.buffer, Unit.BYTE, index)
        return self.buffer.data[span.offset]

    def code_point_at(self, index: int) -> int:
        span = resolve(self.buffer, Unit.CODE_POINT, index)
        return ord(self.buffer.data[span.offset : span.end].decode("utf-8"))

    def grapheme_at(self, index: int) -> Grapheme:
        span = resolve(self.buffer, Unit.GRAPHEME, index, classifier=self.classifier)
        return Grapheme(
            offset=span.offset,
            length=span.length,
            data=self.buffer.data[span.offset : span.end],
        )

    def byte_slice(self, start: int, end: Optional[int] = None) -> bytes:
        first, last = resolve_range(self.buffer, Unit.BYTE, start, end)
        return self.buffer.data[first:last]

    def code_point_slice(self, start: int, end: Optional[int] = None) -> str:
        first, last = resolve_range(self.buffer, Unit.CODE_POINT, start, end)
        return self.buffer.data[first:last].decode("utf-8")

    def grapheme_slice(self, start: int, end: Optional[int] = None) -> List[Grapheme]:
        first, last = resolve_range(
            self.buffer, Unit.GRAPHEME, start, end, classifier=self.classifier
        )
        return [
            grapheme
            for grapheme in self.grapheme_iter()
            if first <= grapheme.offset < last
        ]

    def substr(self, start: int, end: Optional[int] = None) -> str:
        """Graphemes ``[start, end)`` as a string."""

        return self._grapheme_bytes(start, end).decode("utf-8")

    def _grapheme_bytes(self, start: int, end: Optional[int]) -> bytes:
        first, last = resolve_range(
            self.buffer, Unit.GRAPHEME, start, end, classifier=self.classifier
        )
        return self.buffer.data[first:last]

    # -- mutation --------------------------------------------------------

    def insert(self, text: TextLike, index: int) -> None:
        mutation.insert(self.buffer, text, index, classifier=self.classifier)

    def remove(self, needle: TextLike) -> bool:
        return mutation.remove(self.buffer, needle)

    def replace(self, needle: TextLike, replacement: TextLike) -> int:
        return mutation.replace(self.buffer, needle, replacement)

    def reverse(self) -> None:
        mutation.reverse(self.buffer)

    def trim(self, cutset: Cutset = " ") -> None:
        mutation.trim(self.buffer, cutset, classifier=self.classifier)

    def trim_left(self, cutset: Cutset = " ") -> None:
        mutation.trim_left(self.buffer, cutset, classifier=self.classifier)

    def trim_right(self, cutset: Cutset = " ") -> None:
        mutation.trim_right(self.buffer, cutset, classifier=self.classifier)

    def concat(self, text: Union["Text", TextLike]) -> None:
        mutation.concat(self.buffer, _content(text))

    def concat_all(self, texts: Iterable[Union["Text", TextLike]]) -> None:
        mutation.concat_all(self.buffer, [_content(text) for text in texts])

    def append(self, *scalars: int) -> None:
        mutation.append(self.buffer, *scalars)

    def repeat(self, times: int) -> None:
        mutation.repeat(self.buffer, times)

    def to_lower(self) -> None:
        mutation.to_lower(self.buffer, self.case_mapper)

    def to_upper(self) -> None:
        mutation.to_upper(self.buffer, self.case_mapper)

    def to_title(self) -> None:
        mutation.to_title(self.buffer, self.case_mapper)

    def chomp(self) -> bool:
        return mutation.chomp(self.buffer)

    # -- search ----------------------------------------------------------

    def index_of(self, needle: TextLike) -> Optional[int]:
        return patterns.index_of(self.buffer, needle, classifier=self.classifier)

    def last_index_of(self, needle: TextLike) -> Optional[int]:
        return patterns.last_index_of(self.buffer, needle, classifier=self.classifier)

    def contains(self, needle: TextLike) -> bool:
        return patterns.contains(self.buffer, needle)

    def count(self, needle: TextLike) -> int:
        return patterns.count(self.buffer, needle)

    def starts_with(self, prefix: TextLike) -> bool:
        return patterns.starts_with(self.buffer, prefix)

    def ends_with(self, suffix: TextLike) -> bool:
        return patterns.ends_with(self.buffer, suffix)

    def split(self, separator: TextLike) -> List[str]:
        return patterns.split(self.buffer, separator)

    def split_iter(self, separator: TextLike) -> Iterator[str]:
        return patterns.split_iter(self.buffer, separator)

    def tokenize(self, separator: TextLike) -> List[str]:
        return patterns.tokenize(self.buffer, separator)

    def token_iter(self, separator: TextLike) -> Iterator[str]:
        return patterns.token_iter(self.buffer, separator)

    def lines(self) -> List[str]:
        return patterns.lines(self.buffer)

    def line_iter(self) -> Iterator[str]:
        return patterns.line_iter(self.buffer)

    # -- parsing ---------------------------------------------------------

    def parse_int(
        self, base: int = 10, *, bits: Optional[int] = None, signed: bool = True
    ) -> int:
        return parsing.parse_int(str(self), base, bits=bits, signed=signed)

    def parse_float(self, *, bits: int = 64) -> float:
        return parsing.parse_float(str(self), bits=bits)

    def parse_bool(self) -> bool:
        return parsing.parse_bool(str(self))

    def parse_truthy(self) -> bool:
        return parsing.parse_truthy(str(self))

    # -- dunder ----------------------------------------------------------

    def __str__(self) -> str:
        return self.buffer.data.decode("utf-8")

    def __bytes__(self) -> bytes:
        return self.buffer.data

    def __len__(self) -> int:
        return self.grapheme_count()

    def __iter__(self) -> Iterator[str]:
        return (grapheme.text for grapheme in self.grapheme_iter())

    def __contains__(self, needle: object) -> bool:
        if not isinstance(needle, (str, bytes, bytearray, memoryview)):
            return False
        return self.contains(needle)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Text):
            return self.same_as(other)
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def __repr__(self) -> str:
        return f"Text({str(self)!r})"


def _content(value: Union[Text, TextLike]) -> TextLike:
    return value.buffer.data if isinstance(value, Text) else value


__all__ = ["Text"]
