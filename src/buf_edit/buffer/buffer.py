"""The immutable line buffer and its navigation, search and edit operations.

A ``Buffer`` is a value: every operation returns a new buffer and leaves the
receiver untouched, so a buffer can be forked and edited along independent
chains. Edits are gated on ``status``. After a failed search the buffer
carries ``Status.NOT_FOUND`` and every edit returns it unchanged, which lets a
chain like ``buf.search("x").delete_line()`` do nothing when ``x`` is absent.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import wraps
from typing import Any, Callable, Iterable, Optional, Tuple, TypeVar

from buf_edit.runtime import telemetry

from .document import join_lines
from .search import Matcher, find_line, regex_matches
from .state import Cursor, Direction, Status
from .sync import BufferMirror

_Op = TypeVar("_Op", bound=Callable[..., "Buffer"])

LineReplacer = Callable[["Buffer", str], str]


def _when_ok(operation: _Op) -> _Op:
    """Turn ``operation`` into the identity when the buffer is NOT_FOUND."""

    @wraps(operation)
    def gated(self: "Buffer", *args: Any, **kwargs: Any) -> "Buffer":
        if self.status is not Status.OK:
            telemetry.record_event(
                "buffer.skipped",
                level="debug",
                data={
                    "operation": operation.__name__,
                    "status": self.status.value,
                    "line_num": self.line_num,
                },
            )
            return self
        return operation(self, *args, **kwargs)

    return gated  # type: ignore[return-value]


@dataclass(frozen=True, slots=True)
class Buffer:
    """Lines of text plus a 1-based cursor and the last search status."""

    lines: Tuple[str, ...] = ()
    source_id: Optional[str] = None
    line_num: int = 1
    col: int = 1
    status: Status = Status.OK

    def __post_init__(self) -> None:
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, "lines", tuple(self.lines))
        object.__setattr__(self, "status", Status(self.status))

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], source_id: Optional[str] = None
    ) -> "Buffer":
        return cls(lines=tuple(lines), source_id=source_id)

    # -- inspection -------------------------------------------------------

    @property
    def cursor(self) -> Cursor:
        return (self.line_num, self.col)

    def current_line(self) -> Optional[str]:
        """Return the line under the cursor, or ``None`` past either end."""

        return self._line_at(self.line_num - 1)

    def lines_from(self, count: int) -> Tuple[Optional[str], ...]:
        """Return ``count`` lines starting at the cursor.

        The result always has ``count`` entries; entries that fall outside
        the buffer are ``None`` rather than being dropped.
        """

        start = self.line_num - 1
        return tuple(self._line_at(start + offset) for offset in range(count))

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=join_lines(self.lines),
            cursor=self.cursor,
            status=self.status,
            line_count=len(self.lines),
            source_id=self.source_id,
            attributes=dict(attributes or {}),
        )

    def _line_at(self, index: int) -> Optional[str]:
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return None

    # -- navigation -------------------------------------------------------

    def move_to(self, line_num: int, col: int) -> "Buffer":
        """Place the cursor; targets are not validated and status becomes OK."""

        return replace(self, line_num=line_num, col=col, status=Status.OK)

    def move_relative(self, line_num_offset: int, col_offset: int) -> "Buffer":
        return self.move_to(self.line_num + line_num_offset, self.col + col_offset)

    def move_to_end(self) -> "Buffer":
        return self.move_to(max(len(self.lines), 1), self.col)

    # -- search -----------------------------------------------------------

    def search(
        self,
        pattern: Any,
        direction: Direction | str = Direction.DOWN,
        *,
        matcher: Matcher = regex_matches,
    ) -> "Buffer":
        """Move to the nearest line matching ``pattern``.

        The current line is part of the scanned range in both directions, so
        repeating a search that matched stays on the same line. On a miss the
        cursor is kept and the status becomes ``NOT_FOUND``.
        """

        direction = Direction(direction)
        with telemetry.span(
            "buffer::search",
            component="buffer",
            metadata={
                "pattern": getattr(pattern, "pattern", pattern),
                "direction": direction.value,
                "from_line": self.line_num,
            },
        ) as handle:
            line_num = find_line(self.lines, self.line_num, pattern, direction, matcher)
            if line_num is None:
                handle.add_metadata("result", Status.NOT_FOUND.value)
                telemetry.record_event(
                    "buffer.search_miss",
                    level="debug",
                    data={"source": self.source_id, "line_num": self.line_num},
                )
                return replace(self, status=Status.NOT_FOUND)
            handle.add_metadata("result", line_num)
            return self.move_to(line_num, self.col)

    # -- mutation ---------------------------------------------------------

    @_when_ok
    def insert_line(self, text: str) -> "Buffer":
        """Insert ``text`` before the cursor line and step the cursor past it.

        The insert index is clamped to ``[0, len(lines)]``: a cursor beyond
        the end appends, a non-positive cursor prepends.
        """

        index = min(max(self.line_num - 1, 0), len(self.lines))
        lines = self.lines[:index] + (text,) + self.lines[index:]
        return replace(self, lines=lines).move_relative(1, 0)

    def insert_lines(self, texts: Iterable[str]) -> "Buffer":
        """Insert ``texts`` in order, leaving the cursor after the last one.

        The result always reports ``Status.OK``, even when the input was
        ``NOT_FOUND`` and no line was inserted.
        """

        buffer = self
        for text in texts:
            buffer = buffer.insert_line(text)
        return replace(buffer, status=Status.OK)

    @_when_ok
    def delete_line(self) -> "Buffer":
        """Remove the cursor line; a cursor outside the lines removes nothing."""

        index = self.line_num - 1
        if 0 <= index < len(self.lines):
            lines = self.lines[:index] + self.lines[index + 1 :]
        else:
            lines = self.lines
        return replace(self, lines=lines, status=Status.OK)

    def delete_lines(self, count: int) -> "Buffer":
        """Delete ``count`` lines at the cursor, stopping once nothing is left."""

        buffer = self
        for _ in range(count):
            if buffer.status is not Status.OK or buffer.current_line() is None:
                # every further delete_line would return the buffer unchanged
                break
            buffer = buffer.delete_line()
        return buffer

    @_when_ok
    def replace_line(self, fn: LineReplacer) -> "Buffer":
        """Swap the cursor line for ``fn(buffer_without_line, old_text)``.

        The replacement is deleted and re-inserted, so the cursor ends one line
        below the replaced line. Out-of-range cursors have nothing to replace
        and return the buffer unchanged.
        """

        line = self.current_line()
        if line is None:
            return self
        without = self.delete_line()
        return without.insert_line(fn(without, line))

    def replace_in_line(
        self, search_text: str, replace_text: str, count: int = -1
    ) -> "Buffer":
        """Substitute ``search_text`` in the cursor line (all matches by default)."""

        return self.replace_line(
            lambda _buffer, line: line.replace(search_text, replace_text, count)
        )


__all__ = ["Buffer", "LineReplacer"]
