"""Conversion between raw text and buffer lines."""

from __future__ import annotations

import re
from typing import Iterable, List

_LINE_BREAK = re.compile(r"\r\n|\n")


def split_lines(text: str) -> List[str]:
    """Split ``text`` on ``\\r\\n`` or ``\\n``.

    Unlike ``str.splitlines`` a trailing terminator produces a trailing empty
    line, so ``join_lines(split_lines(text))`` gives back ``text`` with
    ``\\r\\n`` normalized to ``\\n``.
    """

    return _LINE_BREAK.split(text)


def join_lines(lines: Iterable[str]) -> str:
    return "\n".join(lines)


__all__ = ["split_lines", "join_lines"]
