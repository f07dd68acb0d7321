"""Pane-split geometry for the stacked request/response panes.

The content area is the terminal height minus the separator row and the status
row. ``split_ratio`` is the share of that area given to the request pane.
Every resize operation derives the new ratio from a target height in whole
lines (``lines / total``) instead of nudging the previous ratio, so repeated
expand/shrink steps land exactly on the minimum and maximum pane sizes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

DEFAULT_SPLIT_RATIO = 0.5
MIN_PANE_LINES = 3
# Absorbs representation error when ``(n / total) * total`` lands just below n.
_FLOOR_EPSILON = 1e-9


@dataclass
class PaneLayout:
    """Terminal size plus the request/response split."""

    terminal_width: int = 80
    terminal_height: int = 24
    split_ratio: float = DEFAULT_SPLIT_RATIO
    min_pane_lines: int = MIN_PANE_LINES

    @property
    def total_content_height(self) -> int:
        return max(0, self.terminal_height - 2)

    @property
    def can_split(self) -> bool:
        """Return whether both panes fit at their minimum height."""
        return self.total_content_height >= 2 * self.min_pane_lines

    @property
    def min_ratio(self) -> float:
        total = self.total_content_height
        if not self.can_split:
            return 0.0
        return self.min_pane_lines / total

    @property
    def max_ratio(self) -> float:
        total = self.total_content_height
        if not self.can_split:
            return 1.0
        return (total - self.min_pane_lines) / total

    def request_height(self, has_response: bool = True) -> int:
        """Rows available to the request pane."""
        if not has_response:
            return max(1, self.terminal_height - 1)
        total = self.total_content_height
        rows = math.floor(total * self.split_ratio + _FLOOR_EPSILON)
        return max(0, min(rows, total))

    def response_height(self, has_response: bool = True) -> int:
        if not has_response:
            return 0
        return self.total_content_height - self.request_height()

    def resize(self, width: int, height: int, has_response: bool = True) -> None:
        """Adopt a new terminal size, re-clamping the ratio to the new bounds."""
        self.terminal_width = max(1, width)
        self.terminal_height = max(1, height)
        if has_response and self.can_split:
            self.split_ratio = max(self.min_ratio, min(self.split_ratio, self.max_ratio))

    def _set_request_lines(self, lines: int) -> bool:
        previous = self.split_ratio
        total = self.total_content_height
        self.split_ratio = max(self.min_ratio, min(lines / total, self.max_ratio))
        return self.split_ratio != previous

    def expand_request(self) -> bool:
        """Grow the request pane by one line; return whether the split changed."""
        if not self.can_split:
            return False
        current = self.request_height()
        if current >= self.total_content_height - self.min_pane_lines:
            return False
        return self._set_request_lines(current + 1)

    def shrink_request(self) -> bool:
        if not self.can_split:
            return False
        current = self.request_height()
        if current <= self.min_pane_lines:
            return False
        return self._set_request_lines(current - 1)

    def expand_response(self) -> bool:
        if not self.can_split:
            return False
        current = self.response_height()
        if current >= self.total_content_height - self.min_pane_lines:
            return False
        return self._set_request_lines(self.total_content_height - (current + 1))

    def shrink_response(self) -> bool:
        if not self.can_split:
            return False
        current = self.response_height()
        if current <= self.min_pane_lines:
            return False
        return self._set_request_lines(self.total_content_height - (current - 1))

    def maximize_request(self) -> bool:
        if not self.can_split:
            return False
        return self._set_request_lines(self.total_content_height - self.min_pane_lines)

    def maximize_response(self) -> bool:
        if not self.can_split:
            return False
        return self._set_request_lines(self.min_pane_lines)

    def reset_split(self) -> bool:
        previous = self.split_ratio
        self.split_ratio = DEFAULT_SPLIT_RATIO
        return self.split_ratio != previous

    def collapse_response(self) -> None:
        """Hand the whole content area back to the request pane."""
        self.split_ratio = 1.0

    def restore_after_collapse(self) -> None:
        """Reopen a collapsed split at the default ratio."""
        if self.split_ratio >= 1.0:
            self.split_ratio = DEFAULT_SPLIT_RATIO
