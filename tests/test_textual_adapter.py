from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from buf_edit.adapters.textual import TextualBufferAdapter, TextualUIHooks, render_mirror
from buf_edit.buffer import Buffer, BufferMirror, Status


def make_adapter(
    buffer: Buffer | None = None,
) -> Tuple[TextualBufferAdapter, List[BufferMirror], List[str], List[tuple[str, object | None]]]:
    mirrors: List[BufferMirror] = []
    statuses: List[str] = []
    events: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        update_buffer=mirrors.append,
        update_status=statuses.append,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    buffer = buffer or Buffer.from_lines(["alpha", "beta", "gamma"])
    return TextualBufferAdapter(buffer, hooks), mirrors, statuses, events


def test_adapter_pushes_initial_snapshot() -> None:
    _, mirrors, statuses, _ = make_adapter()

    assert len(mirrors) == 1
    assert mirrors[0].text == "alpha\nbeta\ngamma"
    assert statuses == ["ok"]


def test_adapter_initial_status_reflects_buffer() -> None:
    _, _, statuses, _ = make_adapter(Buffer.from_lines(["x"]).search("missing"))

    assert statuses == ["not_found"]


def test_adapter_applies_commands() -> None:
    adapter, mirrors, statuses, events = make_adapter()

    adapter.submit("/beta/")
    adapter.submit("d")

    assert adapter.buffer.lines == ("alpha", "gamma")
    assert mirrors[-1].text == "alpha\ngamma"
    assert statuses == ["ok", "ok", "ok"]
    assert ("command.submit", "d") in events
    assert adapter.history == ["/beta/", "d"]


def test_adapter_reports_not_found() -> None:
    adapter, _, statuses, _ = make_adapter()

    adapter.submit("/delta/")

    assert statuses[-1] == "not_found"
    assert adapter.buffer.status is Status.NOT_FOUND


def test_adapter_reports_command_errors_without_raising() -> None:
    adapter, mirrors, statuses, events = make_adapter()

    result = adapter.submit("bogus")

    assert result is adapter.buffer
    assert statuses[-1].startswith("command_error:")
    assert events[-1] == ("command.error", "bogus")
    assert len(mirrors) == 1


def test_adapter_save(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    adapter, _, statuses, _ = make_adapter(
        Buffer.from_lines(["one", "two"], source_id=str(target))
    )

    adapter.submit("c uno")

    assert adapter.save() is True
    assert statuses[-1] == "saved"
    assert target.read_text(encoding="utf-8") == "uno\ntwo"


def test_adapter_save_failure_is_reported() -> None:
    adapter, _, statuses, _ = make_adapter()

    assert adapter.save() is False
    assert statuses[-1].startswith("save_error:")


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda mirror: None, log=logs.append)
    adapter = TextualBufferAdapter(Buffer.from_lines(["x"]), hooks)

    adapter.submit("1")

    assert any(line.startswith("command ->") for line in logs)
    assert any("status='ok'" in line for line in logs)


def test_render_mirror_marks_cursor_line() -> None:
    mirror = Buffer.from_lines(["a", "b"]).move_to(2, 1).mirror()

    assert render_mirror(mirror) == " 1 a\n>2 b"


def test_render_mirror_marks_position_past_end() -> None:
    mirror = Buffer.from_lines(["a"]).move_to(2, 1).mirror()

    assert render_mirror(mirror) == " 1 a\n>  ~"
