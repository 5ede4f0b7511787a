"""Directional line scanning with an injectable pattern matcher."""

from __future__ import annotations

import re
from typing import Any, Callable, Optional, Sequence

from .state import Direction

Matcher = Callable[[str, Any], bool]


def regex_matches(text: str, pattern: str | re.Pattern[str]) -> bool:
    """Unanchored regular-expression match, like ``ed``'s ``/re/``."""

    if isinstance(pattern, re.Pattern):
        return pattern.search(text) is not None
    return re.search(pattern, text) is not None


def find_line(
    lines: Sequence[str],
    start: int,
    pattern: Any,
    direction: Direction | str = Direction.DOWN,
    matcher: Matcher = regex_matches,
) -> Optional[int]:
    """Return the 1-based number of the first matching line, or ``None``.

    ``start`` is included in the scan. ``DOWN`` walks ``start..len(lines)``
    upwards, ``UP`` walks ``start..1`` backwards. Starts outside the buffer
    are narrowed to the lines that exist.
    """

    direction = Direction(direction)
    count = len(lines)
    if direction is Direction.DOWN:
        line_numbers = range(max(start, 1), count + 1)
    else:
        line_numbers = range(min(start, count), 0, -1)

    for line_num in line_numbers:
        if matcher(lines[line_num - 1], pattern):
            return line_num
    return None


__all__ = ["Matcher", "regex_matches", "find_line"]
