"""Line buffer value type, search helpers and file collaborators."""

from .buffer import Buffer, LineReplacer
from .document import join_lines, split_lines
from .search import Matcher, find_line, regex_matches
from .state import Cursor, Direction, Status
from .storage import BufferIOError, dump, load, loads, save
from .sync import BufferMirror

__all__ = [
    "Buffer",
    "BufferMirror",
    "BufferIOError",
    "Cursor",
    "Direction",
    "LineReplacer",
    "Matcher",
    "Status",
    "dump",
    "find_line",
    "join_lines",
    "load",
    "loads",
    "regex_matches",
    "save",
    "split_lines",
]
