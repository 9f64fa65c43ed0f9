"""UI-agnostic controller behind the Textual inspector."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Optional, Tuple

from unitext.buffer import UnitextError
from unitext.runtime import telemetry
from unitext.text import Text


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(frozen=True, slots=True)
class GraphemeRow:
    """One table row: a grapheme and the code points and bytes behind it."""

    index: int
    text: str
    offset: int
    length: int
    code_points: Tuple[str, ...]

    @property
    def hex_bytes(self) -> str:
        return self.text.encode("utf-8").hex(" ")


@dataclass(frozen=True, slots=True)
class CommandResult:
    status: str
    message: str = ""


@dataclass(slots=True)
class InspectorHooks:
    """Callbacks the controller uses to push state into widgets."""

    update_rows: Callable[[List[GraphemeRow]], None]
    update_summary: Callable[[str], None] = _noop
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


def grapheme_rows(text: Text) -> List[GraphemeRow]:
    rows = []
    for index, grapheme in enumerate(text.grapheme_iter()):
        rows.append(
            GraphemeRow(
                index=index,
                text=grapheme.text,
                offset=grapheme.offset,
                length=grapheme.length,
                code_points=tuple(f"U+{ord(char):04X}" for char in grapheme.text),
            )
        )
    return rows


def summary_line(text: Text) -> str:
    return (
        f"{text.byte_count()} bytes | {text.code_point_count()} code points | "
        f"{text.grapheme_count()} graphemes"
    )


CommandHandler = Callable[[Text, List[str]], CommandResult]


class TextualInspectorAdapter:
    """Applies command lines to a ``Text`` and refreshes the host UI."""

    def __init__(self, text: Text, hooks: InspectorHooks) -> None:
        self.text = text
        self.hooks = hooks
        self.history: List[str] = []
        self._refresh()

    def submit(self, line: str) -> CommandResult:
        raw = line.strip()
        if not raw:
            return CommandResult(status="command_empty")
        self.history.append(raw)
        command, _, rest = raw.partition(" ")
        handler = _COMMAND_HANDLERS.get(command.lower())
        self._log("command ->", command=command, args=rest)
        if handler is None:
            result = CommandResult(status="command_error", message=f"unknown: {command}")
        else:
            try:
                result = handler(self.text, _split_args(rest))
            except (UnitextError, ValueError) as exc:
                telemetry.record_event(
                    "inspector.command_failed",
                    level="warning",
                    data={"command": command, "error": type(exc).__name__},
                )
                result = CommandResult(status="command_error", message=str(exc))
        self.hooks.update_status(result.message or result.status)
        self._refresh()
        self._log("result <-", status=result.status, message=result.message)
        return result

    def load(self, content: str) -> None:
        self.text.reset(content)
        self._refresh()

    def _refresh(self) -> None:
        self.hooks.update_rows(grapheme_rows(self.text))
        self.hooks.update_summary(summary_line(self.text))

    def _log(self, prefix: str, **fields: object) -> None:
        parts = [prefix]
        parts.extend(f"{key}={value!r}" for key, value in fields.items())
        parts.append(f"generation={self.text.buffer.generation}")
        self.hooks.log(" ".join(parts))


def _split_args(rest: str) -> List[str]:
    return rest.split(" ") if rest else []


def _joined(args: List[str], start: int = 0) -> str:
    return " ".join(args[start:])


def _require(args: List[str], minimum: int, usage: str) -> None:
    if len(args) < minimum:
        raise ValueError(f"usage: {usage}")


def _insert(text: Text, args: List[str]) -> CommandResult:
    _require(args, 2, "insert <index> <text>")
    text.insert(_joined(args, 1), int(args[0]))
    return CommandResult(status="insert")


def _remove(text: Text, args: List[str]) -> CommandResult:
    _require(args, 1, "remove <text>")
    found = text.remove(_joined(args))
    return CommandResult(status="remove", message="removed" if found else "not found")


def _replace(text: Text, args: List[str]) -> CommandResult:
    _require(args, 1, "replace <needle> [replacement]")
    replaced = text.replace(args[0], _joined(args, 1))
    return CommandResult(status="replace", message=f"{replaced} replaced")


def _trim(text: Text, args: List[str], *, side: str = "both") -> CommandResult:
    cutset = _joined(args) or " "
    {"both": text.trim, "left": text.trim_left, "right": text.trim_right}[side](cutset)
    return CommandResult(status=f"trim_{side}")


def _repeat(text: Text, args: List[str]) -> CommandResult:
    _require(args, 1, "repeat <count>")
    text.repeat(int(args[0]))
    return CommandResult(status="repeat")


def _concat(text: Text, args: List[str]) -> CommandResult:
    text.concat(_joined(args))
    return CommandResult(status="concat")


def _reset(text: Text, args: List[str]) -> CommandResult:
    text.reset(_joined(args))
    return CommandResult(status="reset")


def _chomp(text: Text, args: List[str]) -> CommandResult:
    del args
    return CommandResult(status="chomp", message="chomped" if text.chomp() else "")


def _unary(name: str, text: Text, args: List[str]) -> CommandResult:
    del args
    getattr(text, name)()
    return CommandResult(status=name)


def _find(text: Text, args: List[str]) -> CommandResult:
    _require(args, 1, "find <text>")
    position: Optional[int] = text.index_of(_joined(args))
    message = "not found" if position is None else f"grapheme {position}"
    return CommandResult(status="find", message=message)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "insert": _insert,
    "remove": _remove,
    "replace": _replace,
    "trim": _trim,
    "ltrim": partial(_trim, side="left"),
    "rtrim": partial(_trim, side="right"),
    "repeat": _repeat,
    "concat": _concat,
    "reset": _reset,
    "chomp": _chomp,
    "find": _find,
    "reverse": partial(_unary, "reverse"),
    "upper": partial(_unary, "to_upper"),
    "lower": partial(_unary, "to_lower"),
    "title": partial(_unary, "to_title"),
}


__all__ = [
    "CommandResult",
    "GraphemeRow",
    "InspectorHooks",
    "TextualInspectorAdapter",
    "grapheme_rows",
    "summary_line",
]
