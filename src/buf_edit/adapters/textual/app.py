"""Executable Textual app for editing a file with buffer commands."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.containers import VerticalScroll
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use buf_edit.adapters.textual.app"
    ) from exc

from buf_edit.buffer import Buffer, BufferIOError, BufferMirror, load
from buf_edit.runtime import telemetry

from .controller import TextualBufferAdapter, TextualUIHooks, render_mirror


class BufEditApp(App[None]):
    """Buffer view, status line and a command prompt."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-area {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		dock: bottom;
	}
	"""

    BINDINGS = [
        ("ctrl+s", "save", "Save"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, buffer: Buffer) -> None:
        super().__init__()
        self._initial_buffer = buffer
        self.adapter: TextualBufferAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._logger = telemetry.get_logger("buf_edit.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        yield Input(
            placeholder="/re/  ?re?  N  $  d  i TEXT  c TEXT  s/a/b/",
            id="command-line",
        )
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            log=self._logger.debug,
        )
        self.adapter = TextualBufferAdapter(self._initial_buffer, hooks)
        self.title = self._initial_buffer.source_id or "buf-edit"
        self.query_one("#command-line", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.adapter is None:
            return
        command = event.value
        event.input.value = ""
        if command.strip():
            self.adapter.submit(command)

    def action_save(self) -> None:
        if self.adapter is not None:
            self.adapter.save()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget is not None:
            self._buffer_widget.update(render_mirror(mirror))

    def _update_status(self, status: str) -> None:
        if self._status_widget is not None:
            buffer = self.adapter.buffer if self.adapter else self._initial_buffer
            line_num, col = buffer.cursor
            self._status_widget.update(f"{status}  [{line_num}:{col}]")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="buf-edit-tui", description="Edit a file interactively with buffer commands."
    )
    parser.add_argument("path", help="File to edit")
    parser.add_argument(
        "--encoding",
        default=os.environ.get("BUF_EDIT_ENCODING", "utf-8"),
        help="Text encoding (default: utf-8)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        buffer = load(args.path, encoding=args.encoding)
    except BufferIOError as exc:
        print(f"buf-edit-tui: {exc}", file=sys.stderr)
        return 1
    BufEditApp(buffer).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    raise SystemExit(main())
