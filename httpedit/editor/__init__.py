"""Text model for the request and response panes."""

from .buffer import EditorBuffer, TextBuffer
from .response import ResponseView
from .selection import SelectionTracker

__all__ = [
    "EditorBuffer",
    "TextBuffer",
    "ResponseView",
    "SelectionTracker",
]
