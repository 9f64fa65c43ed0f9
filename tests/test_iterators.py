import pytest

from unitext.buffer import InvalidEncoding, StaleIteratorError, TextBuffer
from unitext.iterators import (
    BoundaryContext,
    CodePointClassifier,
    CodePointIterator,
    CombiningClassifier,
    GraphemeIterator,
    RegexClassifier,
    available_classifiers,
    decode_at,
    encode,
    get_classifier,
    register_classifier,
    segment,
)

SAMPLES = [
    "",
    "plain ascii",
    "Héllo 😊",
    "e\u0301 combining",
    "日本語テキスト",
    "🇺🇸🇬🇧 flags",
    "👨‍👩‍👧 family",
    "line\r\nbreak",
]


def make_buffer(text: str) -> TextBuffer:
    return TextBuffer(text.encode("utf-8"))


def graphemes_of(text: str, classifier=None) -> list[str]:
    iterator = GraphemeIterator(make_buffer(text), classifier=classifier)
    return [grapheme.text for grapheme in iterator]


@pytest.mark.parametrize("text", SAMPLES)
def test_code_points_round_trip(text: str) -> None:
    buffer = make_buffer(text)

    assert encode(CodePointIterator(buffer)) == text.encode("utf-8")


def test_code_point_offsets_and_lengths() -> None:
    points = list(CodePointIterator(make_buffer("Héllo 😊")))

    assert [point.scalar for point in points] == [ord(c) for c in "Héllo 😊"]
    assert [point.offset for point in points] == [0, 1, 3, 4, 5, 6, 7]
    assert [point.length for point in points] == [1, 2, 1, 1, 1, 1, 4]


def test_code_point_iterator_starts_at_offset() -> None:
    points = list(CodePointIterator(make_buffer("Héllo"), offset=3))

    assert "".join(point.char for point in points) == "llo"


def test_peek_does_not_consume() -> None:
    iterator = CodePointIterator(make_buffer("ab"))

    assert iterator.peek().char == "a"
    assert next(iterator).char == "a"
    assert next(iterator).char == "b"
    assert iterator.peek() is None


@pytest.mark.parametrize(
    "data",
    [
        b"\xc0\xaf",  # overlong
        b"\xed\xa0\x80",  # surrogate
        b"\xe2\x82",  # truncated
        b"\xe2\x28\xa1",  # bad continuation
        b"\xf4\x90\x80\x80",  # above U+10FFFF
        b"\x80",  # stray continuation
    ],
)
def test_decode_at_reports_malformed_sequences(data: bytes) -> None:
    with pytest.raises(InvalidEncoding):
        decode_at(data, 0)


def test_iterator_reports_corruption_instead_of_skipping() -> None:
    buffer = TextBuffer(bytearray(b"ok\xff"), validate=False)
    iterator = CodePointIterator(buffer)

    assert next(iterator).char == "o"
    assert next(iterator).char == "k"
    with pytest.raises(InvalidEncoding) as excinfo:
        next(iterator)
    assert excinfo.value.offset == 2


def test_code_point_iterator_goes_stale_after_edit() -> None:
    buffer = make_buffer("abc")
    iterator = CodePointIterator(buffer)
    next(iterator)

    buffer.replace_range(0, 0, b"x")

    with pytest.raises(StaleIteratorError):
        next(iterator)


def test_grapheme_iterator_goes_stale_after_edit() -> None:
    buffer = make_buffer("abc")
    iterator = GraphemeIterator(buffer)
    next(iterator)

    buffer.replace_range(3, 3, b"d")

    with pytest.raises(StaleIteratorError):
        next(iterator)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Héllo", ["H", "é", "l", "l", "o"]),
        ("e\u0301x", ["e\u0301", "x"]),
        ("🇺🇸🇬🇧", ["🇺🇸", "🇬🇧"]),
        ("👨‍👩‍👧!", ["👨‍👩‍👧", "!"]),
        ("a\r\nb", ["a", "\r\n", "b"]),
        ("👍🏽ok", ["👍🏽", "o", "k"]),
    ],
)
def test_regex_classifier_clusters(text: str, expected: list[str]) -> None:
    assert graphemes_of(text, RegexClassifier()) == expected


@pytest.mark.parametrize("text", SAMPLES)
def test_graphemes_cover_the_buffer(text: str) -> None:
    buffer = make_buffer(text)
    spans = list(GraphemeIterator(buffer))

    assert b"".join(span.data for span in spans) == buffer.data
    for previous, current in zip(spans, spans[1:]):
        assert previous.end == current.offset


def test_combining_classifier_handles_marks_and_flags() -> None:
    classifier = CombiningClassifier()

    assert graphemes_of("e\u0301a", classifier) == ["e\u0301", "a"]
    assert graphemes_of("🇺🇸🇬", classifier) == ["🇺🇸", "🇬"]
    assert graphemes_of("\r\n", classifier) == ["\r\n"]


def test_code_point_classifier_splits_every_scalar() -> None:
    assert graphemes_of("e\u0301", CodePointClassifier()) == ["e", "\u0301"]


def test_custom_classifier_is_injected() -> None:
    class NeverBreak:
        name = "never"

        def __init__(self) -> None:
            self.contexts: list[BoundaryContext] = []

        def is_boundary(self, context: BoundaryContext) -> bool:
            self.contexts.append(context)
            return False

    classifier = NeverBreak()

    assert graphemes_of("abc", classifier) == ["abc"]
    assert classifier.contexts[-1].cluster == (ord("a"), ord("b"))
    assert classifier.contexts[-1].current == ord("c")


def test_segment_returns_cluster_offsets() -> None:
    assert segment("e\u0301a😊".encode("utf-8")) == [0, 3, 4]


def test_classifier_registry() -> None:
    assert {"regex", "combining", "codepoint"} <= set(available_classifiers())
    assert get_classifier("codepoint") is get_classifier("codepoint")

    with pytest.raises(KeyError):
        get_classifier("nope")
    with pytest.raises(ValueError):
        register_classifier("regex", RegexClassifier)
