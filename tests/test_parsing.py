import math

import pytest

from unitext import ParseError, Text
from unitext.ops import parse_bool, parse_float, parse_int, parse_truthy


@pytest.mark.parametrize(
    "text, expected",
    [("on", True), ("T", True), ("Yes", True), ("off", False), ("N", False), ("FALSE", False)],
)
def test_parse_truthy_vocabulary(text: str, expected: bool) -> None:
    assert parse_truthy(text) is expected


@pytest.mark.parametrize("text", ["maybe", "", "1", " yes"])
def test_parse_truthy_rejects_unknown_words(text: str) -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_truthy(text)

    assert excinfo.value.value == text


def test_parse_bool_is_strict() -> None:
    assert parse_bool("TRUE") is True
    assert parse_bool("false") is False
    with pytest.raises(ParseError):
        parse_bool("yes")


@pytest.mark.parametrize(
    "text, base, expected",
    [("42", 10, 42), ("-17", 10, -17), ("ff", 16, 255), ("0b101", 0, 5), ("1_000", 10, 1000)],
)
def test_parse_int(text: str, base: int, expected: int) -> None:
    assert parse_int(text, base) == expected


@pytest.mark.parametrize("text", ["", "12a", " 12", "12 ", "\t3"])
def test_parse_int_rejects_malformed_input(text: str) -> None:
    with pytest.raises(ParseError):
        parse_int(text)


def test_parse_int_checks_width() -> None:
    assert parse_int("127", bits=8) == 127
    assert parse_int("-128", bits=8) == -128
    assert parse_int("255", bits=8, signed=False) == 255

    with pytest.raises(ParseError):
        parse_int("128", bits=8)
    with pytest.raises(ParseError):
        parse_int("-1", bits=8, signed=False)
    with pytest.raises(ValueError):
        parse_int("1", bits=0)


def test_parse_float() -> None:
    assert parse_float("3.5") == 3.5
    assert parse_float("-1e3") == -1000.0
    assert math.isinf(parse_float("inf"))

    with pytest.raises(ParseError):
        parse_float("three")
    with pytest.raises(ParseError):
        parse_float("1.0 ")


def test_parse_float_single_precision() -> None:
    assert parse_float("0.1", bits=32) != 0.1
    assert parse_float("0.5", bits=32) == 0.5

    with pytest.raises(ParseError):
        parse_float("1e39", bits=32)
    with pytest.raises(ValueError):
        parse_float("1", bits=16)


def test_text_parse_methods_read_content() -> None:
    assert Text("-42").parse_int(bits=16) == -42
    assert Text("2.25").parse_float() == 2.25
    assert Text("Off").parse_truthy() is False
    assert Text("True").parse_bool() is True

    with pytest.raises(ParseError):
        Text("Héllo").parse_int()


@pytest.mark.parametrize("text", ["١٢", "１２", "४", "1²"])
def test_parse_int_rejects_non_ascii_digits(text: str) -> None:
    with pytest.raises(ParseError):
        Text(text).parse_int()


@pytest.mark.parametrize("text", ["１.5", "١.0", "1.5₀"])
def test_parse_float_rejects_non_ascii_digits(text: str) -> None:
    with pytest.raises(ParseError):
        Text(text).parse_float()
