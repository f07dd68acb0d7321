"""Read-only response view shown in the lower pane."""

from __future__ import annotations

from dataclasses import dataclass

from .buffer import TextBuffer


@dataclass
class ResponseView(TextBuffer):
    """Navigation-only buffer built from one response's rendered text.

    A new view replaces the previous one on every request completion, so no
    scroll or cursor state carries over between responses.
    """

    @classmethod
    def from_text(cls, content: str) -> ResponseView:
        return cls(lines=content.splitlines() or [""])
