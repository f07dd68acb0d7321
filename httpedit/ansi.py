"""Escape-sequence builders and display-width measurement.

The compositor works on plain buffer text, so these helpers only need to
measure and expand characters into terminal cells. Sequence builders keep the
1-indexed row/column convention in one place.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterator

ESC = "\x1b"
CSI = f"{ESC}["

HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"
CLEAR_LINE = f"{CSI}2K"
CLEAR_SCREEN = f"{CSI}2J"
ENTER_ALT_SCREEN = f"{CSI}?1049h"
LEAVE_ALT_SCREEN = f"{CSI}?1049l"
RESET = f"{CSI}0m"

CURSOR_SHAPE_DEFAULT = f"{CSI}0 q"
CURSOR_SHAPE_BLOCK = f"{CSI}1 q"
CURSOR_SHAPE_BAR = f"{CSI}5 q"

TAB_STOP = 8


def move_to(row: int, col: int) -> str:
    """Return an absolute cursor-position sequence for 0-indexed ``row``/``col``."""
    return f"{CSI}{max(0, row) + 1};{max(0, col) + 1}H"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the number of terminal columns ``text`` occupies from column 0."""
    col = 0
    for ch in text:
        col += char_display_width(ch, col)
    return col


def iter_display_cells(text: str, max_cols: int) -> Iterator[tuple[int, str]]:
    """Yield ``(char_index, rendered)`` pairs that fit in ``max_cols`` columns.

    Tabs are expanded to spaces and control characters are shown as ``?`` so
    the cursor math in :func:`display_width` matches what lands on screen.
    """
    col = 0
    for idx, ch in enumerate(text):
        width = char_display_width(ch, col)
        if col + width > max_cols:
            return
        if ch == "\t":
            rendered = " " * width
        elif not ch.isprintable():
            rendered = "?"
        else:
            rendered = ch
        yield idx, rendered
        col += width
