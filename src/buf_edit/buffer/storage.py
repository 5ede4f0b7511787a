"""Reading buffers from files and writing them back."""

from __future__ import annotations

import codecs
import os
from typing import Optional

from buf_edit.runtime import telemetry

from .buffer import Buffer
from .document import join_lines, split_lines


class BufferIOError(OSError):
    """Raised when a buffer cannot be read from or written to its source."""

    def __init__(self, message: str, *, source_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.source_id = source_id


def loads(text: str, source_id: Optional[str] = None) -> Buffer:
    return Buffer.from_lines(split_lines(text), source_id=source_id)


def load(path: str | os.PathLike[str], *, encoding: str = "utf-8") -> Buffer:
    """Read ``path`` into a buffer whose ``source_id`` is the path."""

    source_id = os.fspath(path)
    with telemetry.span(
        "storage::load", component="storage", metadata={"source": source_id}
    ) as handle:
        try:
            # newline="" keeps "\r\n" intact for split_lines
            with open(source_id, "r", encoding=encoding, newline="") as stream:
                text = stream.read()
        except (OSError, UnicodeDecodeError, LookupError) as exc:
            raise BufferIOError(
                f"Cannot read '{source_id}': {exc}", source_id=source_id
            ) from exc
        buffer = loads(text, source_id=source_id)
        handle.add_metadata("line_count", len(buffer.lines))
        return buffer


def dump(buffer: Buffer) -> str:
    return join_lines(buffer.lines)


def save(
    buffer: Buffer,
    path: str | os.PathLike[str] | None = None,
    *,
    encoding: str = "utf-8",
) -> None:
    """Write ``buffer`` to ``path``, defaulting to its ``source_id``."""

    target = os.fspath(path) if path is not None else buffer.source_id
    if not target:
        raise BufferIOError("Buffer has no source to save to")

    with telemetry.span(
        "storage::save",
        component="storage",
        metadata={"source": target, "line_count": len(buffer.lines)},
    ):
        try:
            codecs.lookup(encoding)  # before open() truncates the target
            with open(target, "w", encoding=encoding, newline="") as stream:
                stream.write(dump(buffer))
        except (OSError, UnicodeEncodeError, LookupError) as exc:
            raise BufferIOError(
                f"Cannot write '{target}': {exc}", source_id=target
            ) from exc


__all__ = ["BufferIOError", "load", "loads", "dump", "save"]
