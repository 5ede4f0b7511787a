"""Snapshot type handed from buffers to host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .state import Cursor, Status


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly view of a buffer: flattened text plus cursor and status."""

    text: str
    cursor: Cursor
    status: Status
    line_count: int
    source_id: Optional[str] = None
    attributes: dict[str, str] = field(default_factory=dict)


__all__ = ["BufferMirror"]
