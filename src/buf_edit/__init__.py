"""In-memory line buffer with ed-style navigation, search and editing."""

from .buffer import Buffer, Direction, Status

__all__ = [
    "Buffer",
    "Direction",
    "Status",
    "actions",
    "adapters",
    "buffer",
    "cli",
    "runtime",
]

__version__ = "0.1.0"
