"""UI-free controller that feeds commands to a buffer and reports back."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List

from buf_edit.actions import CommandError, apply_command
from buf_edit.buffer import Buffer, BufferIOError, BufferMirror, save


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualBufferAdapter:
    """Holds the current buffer value and replaces it on every command."""

    def __init__(self, buffer: Buffer, hooks: TextualUIHooks) -> None:
        self.buffer = buffer
        self.hooks = hooks
        self.history: List[str] = []
        self._refresh_buffer()
        self.hooks.update_status(self.buffer.status.value)

    def submit(self, command: str) -> Buffer:
        """Apply ``command``; parse errors are reported, not raised."""

        self.history.append(command)
        self._log_state("command ->", command=command)
        try:
            self.buffer = apply_command(self.buffer, command)
        except CommandError as exc:
            self.hooks.update_status(f"command_error:{exc}")
            self.hooks.handle_event("command.error", command)
            return self.buffer

        self.hooks.update_status(self.buffer.status.value)
        self.hooks.handle_event("command.submit", command)
        self._refresh_buffer()
        self._log_state("result <-", status=self.buffer.status.value)
        return self.buffer

    def save(self) -> bool:
        try:
            save(self.buffer)
        except BufferIOError as exc:
            self.hooks.update_status(f"save_error:{exc}")
            return False
        self.hooks.update_status("saved")
        self.hooks.handle_event("buffer.saved", self.buffer.source_id)
        return True

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.buffer.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "source": self.buffer.source_id,
            "cursor": self.buffer.cursor,
            "lines": len(self.buffer.lines),
        }
        snapshot.update(fields)
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


def render_mirror(mirror: BufferMirror) -> str:
    """Number each line and mark the cursor line with ``>``."""

    lines = mirror.text.split("\n") if mirror.line_count else []
    line_num = mirror.cursor[0]
    width = len(str(max(len(lines), 1)))
    rendered = []
    for number, line in enumerate(lines, start=1):
        marker = ">" if number == line_num else " "
        rendered.append(f"{marker}{number:>{width}} {line}")
    if line_num == len(lines) + 1:
        rendered.append(f">{'':>{width}} ~")
    return "\n".join(rendered)


__all__ = ["TextualBufferAdapter", "TextualUIHooks", "render_mirror"]
