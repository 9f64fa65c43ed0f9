import sys

import pytest

from unitext import AllocationFailure, IndexOutOfRange, StaleIteratorError, Text
from unitext.buffer import TextBuffer
from unitext.ops import SimpleCaseMapper, mutation


def make_text(content: str, **options) -> Text:
    return Text(content, **options)


def test_insert_at_grapheme_positions() -> None:
    text = make_text("ae\u0301c")

    text.insert("!", 2)
    assert str(text) == "ae\u0301!c"

    text.insert("<", 0)
    text.insert(">", text.grapheme_count())
    assert str(text) == "<ae\u0301!c>"


def test_insert_with_negative_index() -> None:
    text = make_text("abc")

    text.insert("_", -1)

    assert str(text) == "ab_c"


def test_insert_out_of_range_leaves_buffer_untouched() -> None:
    text = make_text("abc")
    generation = text.buffer.generation

    with pytest.raises(IndexOutOfRange):
        text.insert("x", 4)

    assert str(text) == "abc"
    assert text.buffer.generation == generation


def test_remove_first_occurrence_only() -> None:
    text = make_text("one two one")

    assert text.remove("one") is True
    assert str(text) == " two one"
    assert text.remove("three") is False
    assert str(text) == " two one"


def test_replace_counts_and_rewrites() -> None:
    text = make_text("Hello")

    assert text.replace("l", "z") == 2
    assert str(text) == "Hezzo"
    assert text.replace("z", "") == 2
    assert str(text) == "Heo"
    assert text.replace("q", "x") == 0
    assert str(text) == "Heo"


def test_replace_does_not_rescan_inserted_text() -> None:
    text = make_text("aaa")

    assert text.replace("a", "aa") == 3
    assert str(text) == "aaaaaa"


def test_replace_then_count_is_zero() -> None:
    text = make_text("ab-ab-ab")

    text.replace("ab", "")

    assert text.count("ab") == 0


def test_replace_rejects_empty_needle() -> None:
    with pytest.raises(ValueError):
        make_text("abc").replace("", "x")


def test_reverse_keeps_code_points_intact() -> None:
    text = make_text("Héllo 😊")

    text.reverse()

    assert str(text) == "😊 olléH"


def test_reverse_twice_restores_bytes() -> None:
    original = "e\u0301 日本 🇺🇸"
    text = make_text(original)

    text.reverse()
    text.reverse()

    assert bytes(text) == original.encode("utf-8")


def test_reverse_moves_combining_mark_before_its_base() -> None:
    text = make_text("e\u0301a")

    text.reverse()

    assert str(text) == "a\u0301e"


def test_trim_spaces_is_idempotent() -> None:
    text = make_text("   padded text  ")

    text.trim(" ")
    once = str(text)
    text.trim(" ")

    assert once == "padded text"
    assert str(text) == once


def test_trim_left_and_right() -> None:
    left = make_text("\t x \t")
    right = make_text("\t x \t")

    left.trim_left(" \t")
    right.trim_right(" \t")

    assert str(left) == "x \t"
    assert str(right) == "\t x"


def test_trim_compares_whole_graphemes() -> None:
    text = make_text("ee\u0301e")

    text.trim("e")

    assert str(text) == "e\u0301"


def test_trim_with_iterable_cutset() -> None:
    text = make_text(" e\u0301x e\u0301")

    text.trim(["e\u0301", " "])

    assert str(text) == "x"


def test_trim_everything() -> None:
    text = make_text("   ")

    text.trim()

    assert text.is_empty()


def test_concat_and_concat_all() -> None:
    text = make_text("a")

    text.concat("b")
    text.concat(Text("c"))
    text.concat_all(["d", b"e", Text("f")])

    assert str(text) == "abcdef"


def test_append_code_points() -> None:
    text = make_text("x")

    text.append(0xE9, 0x1F60A)

    assert str(text) == "xé😊"


@pytest.mark.parametrize(
    "times, expected", [(0, ""), (1, "ab"), (3, "ababab")]
)
def test_repeat(times: int, expected: str) -> None:
    text = make_text("ab")

    text.repeat(times)

    assert str(text) == expected


def test_repeat_rejects_negative() -> None:
    with pytest.raises(ValueError):
        make_text("ab").repeat(-1)


def test_repeat_overflow_reports_allocation_failure() -> None:
    text = make_text("ab")

    with pytest.raises(AllocationFailure):
        text.repeat(sys.maxsize)

    assert str(text) == "ab"


def test_case_conversion() -> None:
    text = make_text("héllo wORLD\tagain")

    text.to_upper()
    assert str(text) == "HÉLLO WORLD\tAGAIN"

    text.to_lower()
    assert str(text) == "héllo world\tagain"

    text.to_title()
    assert str(text) == "Héllo World\tAgain"


def test_case_conversion_is_not_reversible() -> None:
    text = make_text("Hello")

    text.to_upper()
    text.to_lower()

    assert str(text) == "hello"


def test_full_and_simple_case_mapping() -> None:
    full = make_text("straße")
    simple = make_text("straße", case_mapper=SimpleCaseMapper())

    full.to_upper()
    simple.to_upper()

    assert str(full) == "STRASSE"
    assert str(simple) == "STRAßE"


def test_case_predicates() -> None:
    assert make_text("abc 1").is_lower()
    assert not make_text("aBc").is_lower()
    assert make_text("ABC 1").is_upper()


@pytest.mark.parametrize(
    "content, expected, removed",
    [
        ("line\r\n", "line", True),
        ("line\n\n", "line\n", True),
        ("line\r", "line", True),
        ("line", "line", False),
        ("", "", False),
    ],
)
def test_chomp(content: str, expected: str, removed: bool) -> None:
    text = make_text(content)

    assert text.chomp() is removed
    assert str(text) == expected


def test_mutation_invalidates_live_iterators() -> None:
    text = make_text("abc")
    points = text.code_point_iter()
    graphemes = text.grapheme_iter()
    next(points)

    text.concat("d")

    with pytest.raises(StaleIteratorError):
        next(points)
    with pytest.raises(StaleIteratorError):
        next(graphemes)


def test_functions_work_on_borrowed_buffers() -> None:
    source = b"borrowed"
    buffer = TextBuffer.from_bytes(source)

    mutation.to_upper(buffer)

    assert buffer.data == b"BORROWED"
    assert source == b"borrowed"
