"""Word-motion primitives shared by the request buffer and response view.

Characters fall into three classes: identifier characters (alphanumerics and
underscore), whitespace, and everything else. A motion step crosses the run
of the class under the cursor.
"""

from __future__ import annotations

from collections.abc import Sequence

WORD = 0
SPACE = 1
PUNCT = 2


def char_class(ch: str) -> int:
    """Return the motion class for one character."""
    if ch.isalnum() or ch == "_":
        return WORD
    if ch.isspace():
        return SPACE
    return PUNCT


def _first_non_space(line: str) -> int:
    col = 0
    while col < len(line) and line[col].isspace():
        col += 1
    return col


def word_forward(lines: Sequence[str], line: int, col: int) -> tuple[int, int]:
    """Return the position one word to the right of ``(line, col)``.

    Reaching the end of a line continues on the next line's first
    non-whitespace column; the last line's end is a fixed point.
    """
    text = lines[line]
    last_line = len(lines) - 1
    if col >= len(text):
        if line < last_line:
            return line + 1, _first_non_space(lines[line + 1])
        return line, len(text)

    start_class = char_class(text[col])
    pos = col
    while pos < len(text) and char_class(text[pos]) == start_class:
        pos += 1
    if pos < len(text):
        return line, pos
    if line < last_line:
        return line + 1, _first_non_space(lines[line + 1])
    return line, len(text)


def word_backward(lines: Sequence[str], line: int, col: int) -> tuple[int, int]:
    """Return the start of the word to the left of ``(line, col)``.

    Column 0 wraps to the end of the previous line and keeps walking, so
    blank lines are skipped.
    """
    while col == 0:
        if line == 0:
            return 0, 0
        line -= 1
        col = len(lines[line])

    text = lines[line]
    pos = min(col, len(text)) - 1
    if char_class(text[pos]) == SPACE:
        while pos > 0 and char_class(text[pos]) == SPACE:
            pos -= 1
        if char_class(text[pos]) == SPACE:
            return line, 0

    run_class = char_class(text[pos])
    while pos > 0 and char_class(text[pos - 1]) == run_class:
        pos -= 1
    return line, pos
