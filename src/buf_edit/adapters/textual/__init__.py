"""Textual host: a UI-free controller plus the app in ``app``."""

from .controller import TextualBufferAdapter, TextualUIHooks, render_mirror

__all__ = ["TextualBufferAdapter", "TextualUIHooks", "render_mirror"]
