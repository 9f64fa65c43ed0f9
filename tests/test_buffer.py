import pytest

from unitext.buffer import buffer as buffer_module
from unitext.buffer import (
    IndexOutOfRange,
    InvalidEncoding,
    StaleIteratorError,
    TextBuffer,
)


def test_from_bytes_borrows_and_copies_on_first_edit() -> None:
    source = bytearray(b"hello")
    buffer = TextBuffer.from_bytes(source)

    assert buffer.owns is False
    assert buffer.data == b"hello"

    buffer.replace_range(0, 1, b"J")

    assert buffer.data == b"Jello"
    assert buffer.owns is True
    assert source == bytearray(b"hello")
    source.extend(b"!")  # borrow released, caller may resize again
    assert source == bytearray(b"hello!")


@pytest.mark.parametrize(
    "data, offset",
    [
        (b"\xff", 0),
        (b"ab\xc3", 2),
        (b"\xed\xa0\x80", 0),
        (b"ok\xc0\xaf", 2),
    ],
)
def test_invalid_utf8_is_rejected(data: bytes, offset: int) -> None:
    with pytest.raises(InvalidEncoding) as excinfo:
        TextBuffer.from_bytes(data)

    assert excinfo.value.offset == offset


def test_from_owned_bytes_adopts_bytearray() -> None:
    storage = bytearray("Héllo".encode("utf-8"))
    buffer = TextBuffer.from_owned_bytes(storage)

    assert buffer.owns is True
    buffer.release()

    assert storage == bytearray()


def test_from_code_points_encodes_each_scalar() -> None:
    buffer = TextBuffer.from_code_points([0x48, 0xE9, 0x1F60A])

    assert buffer.data == "Hé😊".encode("utf-8")


@pytest.mark.parametrize("scalar", [0xD800, 0xDFFF, 0x110000, -1])
def test_from_code_points_rejects_non_scalars(scalar: int) -> None:
    with pytest.raises(InvalidEncoding):
        TextBuffer.from_code_points([0x41, scalar])


def test_from_joined_uses_separator() -> None:
    buffer = TextBuffer.from_joined(["a", b"b", "ç"], ", ")

    assert buffer.data == "a, b, ç".encode("utf-8")


def test_release_is_idempotent_and_leaves_borrowed_storage_alone() -> None:
    source = bytearray(b"abc")
    buffer = TextBuffer.from_bytes(source)

    buffer.release()
    buffer.release()

    assert buffer.released is True
    assert len(buffer) == 0
    assert source == bytearray(b"abc")


def test_context_manager_releases_on_exit() -> None:
    with TextBuffer.from_owned_bytes(bytearray(b"scoped")) as buffer:
        assert buffer.data == b"scoped"

    assert buffer.released is True
    assert buffer.data == b""


def test_reset_takes_ownership() -> None:
    buffer = TextBuffer.from_bytes(b"borrowed")

    buffer.reset("fresh")

    assert buffer.owns is True
    assert buffer.data == b"fresh"


def test_to_owned_slice_detaches_content() -> None:
    buffer = TextBuffer.from_bytes(b"detach me")

    detached = buffer.to_owned_slice()

    assert detached == bytearray(b"detach me")
    assert isinstance(detached, bytearray)
    assert len(buffer) == 0


def test_copy_is_independent() -> None:
    original = TextBuffer(b"same")
    duplicate = original.copy()

    duplicate.replace_range(0, 4, b"diff")

    assert original.data == b"same"
    assert duplicate.data == b"diff"


def test_replace_range_bounds_and_generation() -> None:
    buffer = TextBuffer(b"abc")
    start = buffer.generation

    with pytest.raises(IndexOutOfRange):
        buffer.replace_range(2, 5, b"")
    assert buffer.generation == start

    buffer.replace_range(1, 2, b"")
    assert buffer.data == b"ac"
    assert buffer.generation == start + 1


def test_ensure_generation_detects_edits() -> None:
    buffer = TextBuffer(b"abc")
    seen = buffer.generation
    buffer.replace_range(0, 0, b"x")

    with pytest.raises(StaleIteratorError) as excinfo:
        buffer.ensure_generation(seen)

    assert excinfo.value.expected == seen
    assert excinfo.value.actual == buffer.generation


def test_transaction_applies_single_splice() -> None:
    buffer = TextBuffer(b"hello")

    with buffer.edit("unit_test") as tx:
        tx.splice(0, 5, b"world")

    assert tx.applied is True
    assert buffer.data == b"world"


def test_transaction_propagates_errors_without_applying() -> None:
    buffer = TextBuffer(b"hello")

    with pytest.raises(IndexOutOfRange):
        with buffer.edit("unit_test") as tx:
            tx.splice(3, 99, b"")

    assert tx.applied is False
    assert buffer.data == b"hello"


def test_edit_after_release_can_be_released_again() -> None:
    buffer = TextBuffer.from_owned_bytes(bytearray(b"abc"))
    buffer.release()

    buffer.replace_range(0, 0, b"again")

    assert buffer.released is False
    assert buffer.owns is True
    buffer.release()
    assert buffer.released is True
    assert buffer.data == b""


def test_scope_exit_frees_content_edited_after_release() -> None:
    with TextBuffer(b"first") as buffer:
        buffer.release()
        buffer.replace_range(0, 0, b"second")

    assert buffer.data == b""


def test_transaction_replace_all_rewrites_whole_buffer() -> None:
    buffer = TextBuffer.from_bytes(b"borrowed")

    with buffer.edit("unit_test") as tx:
        tx.replace_all(b"owned now")

    assert tx.applied is True
    assert buffer.data == b"owned now"
    assert buffer.owns is True


def record_events(monkeypatch) -> list[str]:
    names: list[str] = []
    monkeypatch.setattr(
        buffer_module.telemetry,
        "record_event",
        lambda name, **_kwargs: names.append(name),
    )
    return names


def test_transaction_reset_is_recorded(monkeypatch) -> None:
    events = record_events(monkeypatch)
    buffer = TextBuffer.from_bytes(b"old")

    with buffer.edit("reset") as tx:
        tx.reset("new")

    assert tx.applied is True
    assert buffer.data == b"new"
    assert events == ["buffer.reset"]
