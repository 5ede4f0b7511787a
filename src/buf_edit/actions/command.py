"""Parse and run ``ed``-style commands against a buffer.

Each command is one line of text:

``N``            move to line N
``+N`` / ``-N``  move N lines down / up
``$``            move to the last line
``/re/``         search down (inclusive of the current line)
``?re?``         search up
``d`` / ``dN``   delete one / N lines at the cursor
``i TEXT``       insert TEXT before the cursor line
``c TEXT``       replace the cursor line with TEXT
``s/OLD/NEW/``   replace OLD with NEW in the cursor line

Failed searches do not raise; they leave the buffer in ``NOT_FOUND`` and the
following edits are skipped until the next move or successful search.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Iterable, Optional, Tuple

from buf_edit.buffer import Buffer, Direction
from buf_edit.runtime import telemetry

CommandHandler = Callable[[Buffer, Tuple[str, ...]], Buffer]

_LINE_NUMBER = re.compile(r"\d+")
_RELATIVE = re.compile(r"[+-]\d+")
_COUNT = re.compile(r"\s*(\d*)")


class CommandError(ValueError):
    """Raised for commands that cannot be parsed or executed."""

    def __init__(self, message: str, *, command: Optional[str] = None) -> None:
        super().__init__(message)
        self.command = command


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    args: Tuple[str, ...] = ()


def parse_command(text: str) -> Command:
    raw = text.rstrip("\r\n").lstrip()
    bare = raw.rstrip()
    if not bare:
        raise CommandError("Empty command", command=text)

    if bare == "$":
        return Command("end")
    if _LINE_NUMBER.fullmatch(bare):
        return Command("goto", (bare,))
    if _RELATIVE.fullmatch(bare):
        return Command("relative", (bare,))

    head = bare[0]
    if head in "/?":
        return _parse_search(bare, text)
    if head == "d":
        match = _COUNT.fullmatch(bare[1:])
        if match is None:
            raise CommandError(f"Invalid delete count in '{bare}'", command=text)
        return Command("delete", (match.group(1) or "1",))
    if head in "ic" and (len(raw) == 1 or raw[1] == " "):
        name = "insert" if head == "i" else "change"
        return Command(name, (raw[2:],))
    if head == "s" and len(bare) > 1:
        return _parse_substitute(bare, text)

    raise CommandError(f"Unknown command '{bare}'", command=text)


def _parse_search(bare: str, text: str) -> Command:
    delimiter = bare[0]
    pattern = bare[1:]
    if pattern.endswith(delimiter):
        body = pattern[:-1]
        # an odd run of backslashes escapes the delimiter
        if (len(body) - len(body.rstrip("\\"))) % 2 == 0:
            pattern = body
    if not pattern:
        raise CommandError("Search needs a pattern", command=text)
    name = "search_down" if delimiter == "/" else "search_up"
    return Command(name, (pattern,))


def _parse_substitute(bare: str, text: str) -> Command:
    delimiter = bare[1]
    parts = bare[2:].split(delimiter)
    if len(parts) == 3 and parts[2] == "":
        parts = parts[:2]
    if len(parts) != 2 or not parts[0]:
        raise CommandError(
            f"Expected s{delimiter}OLD{delimiter}NEW{delimiter}", command=text
        )
    return Command("substitute", (parts[0], parts[1]))


def apply_command(buffer: Buffer, text: str) -> Buffer:
    """Parse ``text`` and apply it, returning the resulting buffer."""

    command = parse_command(text)
    handler = _COMMAND_HANDLERS[command.name]
    with telemetry.span(
        "command::execute",
        component="commands",
        metadata={"command": command.name, "source": buffer.source_id},
    ) as handle:
        result = handler(buffer, command.args)
        handle.add_metadata("status", result.status.value)
        return result


def run_script(buffer: Buffer, commands: Iterable[str]) -> Buffer:
    """Apply ``commands`` in order; blank lines and ``#`` comments are skipped."""

    for line in commands:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        buffer = apply_command(buffer, line)
    return buffer


def _handle_goto(buffer: Buffer, args: Tuple[str, ...]) -> Buffer:
    return buffer.move_to(int(args[0]), buffer.col)


def _handle_relative(buffer: Buffer, args: Tuple[str, ...]) -> Buffer:
    return buffer.move_relative(int(args[0]), 0)


def _handle_end(buffer: Buffer, args: Tuple[str, ...]) -> Buffer:
    del args
    return buffer.move_to_end()


def _handle_search(
    buffer: Buffer, args: Tuple[str, ...], *, direction: Direction
) -> Buffer:
    try:
        pattern = re.compile(args[0])
    except re.error as exc:
        raise CommandError(
            f"Invalid pattern '{args[0]}': {exc}", command=args[0]
        ) from exc
    return buffer.search(pattern, direction)


def _handle_delete(buffer: Buffer, args: Tuple[str, ...]) -> Buffer:
    return buffer.delete_lines(int(args[0]))


def _handle_insert(buffer: Buffer, args: Tuple[str, ...]) -> Buffer:
    return buffer.insert_line(args[0])


def _handle_change(buffer: Buffer, args: Tuple[str, ...]) -> Buffer:
    text = args[0]
    return buffer.replace_line(lambda _buffer, _line: text)


def _handle_substitute(buffer: Buffer, args: Tuple[str, ...]) -> Buffer:
    old, new = args
    return buffer.replace_in_line(old, new)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "goto": _handle_goto,
    "relative": _handle_relative,
    "end": _handle_end,
    "search_down": partial(_handle_search, direction=Direction.DOWN),
    "search_up": partial(_handle_search, direction=Direction.UP),
    "delete": _handle_delete,
    "insert": _handle_insert,
    "change": _handle_change,
    "substitute": _handle_substitute,
}


__all__ = ["Command", "CommandError", "apply_command", "parse_command", "run_script"]
