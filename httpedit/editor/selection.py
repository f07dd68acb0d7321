"""Visual-mode selection tracking.

Positions are plain ``(line, column)`` integers, never references into the
buffer, so edits elsewhere can only leave a selection out of range; callers
re-clamp with :meth:`SelectionTracker.clamp`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

Position = tuple[int, int]


@dataclass
class SelectionTracker:
    """Anchor (``start_*``) and moving end (``end_*``) of a visual selection."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    @classmethod
    def anchored_at(cls, line: int, col: int) -> SelectionTracker:
        return cls(start_line=line, start_col=col, end_line=line, end_col=col)

    def extend_to(self, line: int, col: int) -> None:
        self.end_line = line
        self.end_col = col

    def normalized(self) -> tuple[Position, Position]:
        """Return ``(first, last)`` positions regardless of selection direction."""
        anchor = (self.start_line, self.start_col)
        focus = (self.end_line, self.end_col)
        return min(anchor, focus), max(anchor, focus)

    def line_span(self) -> tuple[int, int]:
        return min(self.start_line, self.end_line), max(self.start_line, self.end_line)

    def clamp(self, lines: Sequence[str]) -> None:
        last = max(0, len(lines) - 1)
        self.start_line = max(0, min(self.start_line, last))
        self.end_line = max(0, min(self.end_line, last))
        self.start_col = max(0, min(self.start_col, len(lines[self.start_line]) if lines else 0))
        self.end_col = max(0, min(self.end_col, len(lines[self.end_line]) if lines else 0))

    def covers(self, line: int, col: int, *, line_mode: bool) -> bool:
        """Return whether cell ``(line, col)`` is painted as selected."""
        if line_mode:
            first_line, last_line = self.line_span()
            return first_line <= line <= last_line
        first, last = self.normalized()
        return first <= (line, col) < last

    def selected_text(self, lines: Sequence[str], *, line_mode: bool) -> str:
        """Return the covered text; interior lines of a multi-line range are whole."""
        if line_mode:
            first_line, last_line = self.line_span()
            return "\n".join(lines[first_line : last_line + 1])
        (first_line, first_col), (last_line, last_col) = self.normalized()
        if first_line == last_line:
            return lines[first_line][first_col:last_col]
        parts = [lines[first_line][first_col:]]
        parts.extend(lines[first_line + 1 : last_line])
        parts.append(lines[last_line][:last_col])
        return "\n".join(parts)
