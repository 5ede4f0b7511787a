"""Cursor, status and direction values carried by buffers."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

Cursor = Tuple[int, int]  # (line_num, col), both 1-based


class Status(str, Enum):
    """Outcome of the most recent search; gates mutations."""

    OK = "ok"
    NOT_FOUND = "not_found"


class Direction(str, Enum):
    DOWN = "down"
    UP = "up"
