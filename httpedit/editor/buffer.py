"""Line buffers with cursor and scroll state.

``TextBuffer`` owns navigation shared by both panes; ``EditorBuffer`` adds the
editing operations used by the request pane. Every operation clamps the
cursor and scroll offset, so no key sequence can move them out of bounds.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .words import word_backward, word_forward


def _split_text(text: str) -> list[str]:
    lines = text.split("\n")
    return [line.rstrip("\r") for line in lines]


@dataclass
class TextBuffer:
    """Navigable lines; always holds at least one (possibly empty) line."""

    lines: list[str] = field(default_factory=lambda: [""])
    cursor_line: int = 0
    cursor_col: int = 0
    scroll_offset: int = 0

    def __post_init__(self) -> None:
        if not self.lines:
            self.lines = [""]
        self.clamp()

    # -- bookkeeping -----------------------------------------------------

    def line_length(self, line: int | None = None) -> int:
        """Return the length of ``line`` (default: the cursor line)."""
        idx = self.cursor_line if line is None else line
        if 0 <= idx < len(self.lines):
            return len(self.lines[idx])
        return 0

    def clamp(self) -> None:
        """Pull cursor and scroll offset back inside the buffer."""
        if not self.lines:
            self.lines = [""]
        last = len(self.lines) - 1
        self.cursor_line = max(0, min(self.cursor_line, last))
        self.cursor_col = max(0, min(self.cursor_col, len(self.lines[self.cursor_line])))
        self.scroll_offset = max(0, min(self.scroll_offset, last))

    def clamp_scroll(self, visible_height: int) -> None:
        """Keep the cursor inside a viewport of ``visible_height`` rows."""
        visible_height = max(1, visible_height)
        if self.cursor_line < self.scroll_offset:
            self.scroll_offset = self.cursor_line
        elif self.cursor_line >= self.scroll_offset + visible_height:
            self.scroll_offset = self.cursor_line - visible_height + 1
        self.clamp()

    def text(self) -> str:
        return "\n".join(self.lines)

    # -- horizontal motion -----------------------------------------------

    def move_left(self) -> None:
        if self.cursor_col > 0:
            self.cursor_col -= 1

    def move_right(self) -> None:
        if self.cursor_col < self.line_length():
            self.cursor_col += 1

    def move_to_line_start(self) -> None:
        self.cursor_col = 0

    def move_to_line_end(self) -> None:
        self.cursor_col = self.line_length()

    def move_word_forward(self) -> None:
        self.cursor_line, self.cursor_col = word_forward(self.lines, self.cursor_line, self.cursor_col)

    def move_word_backward(self) -> None:
        self.cursor_line, self.cursor_col = word_backward(self.lines, self.cursor_line, self.cursor_col)

    # -- vertical motion -------------------------------------------------

    def move_up(self) -> None:
        """Move up one line, pulling the viewport up when the cursor leaves it."""
        if self.cursor_line == 0:
            return
        self.cursor_line -= 1
        self.cursor_col = min(self.cursor_col, self.line_length())
        if self.cursor_line < self.scroll_offset:
            self.scroll_offset = self.cursor_line

    def move_down(self, visible_height: int | None = None) -> None:
        """Move down one line; with ``visible_height`` the viewport follows."""
        if self.cursor_line >= len(self.lines) - 1:
            return
        self.cursor_line += 1
        self.cursor_col = min(self.cursor_col, self.line_length())
        if visible_height is not None:
            visible_height = max(1, visible_height)
            if self.cursor_line >= self.scroll_offset + visible_height:
                self.scroll_offset = self.cursor_line - visible_height + 1

    def move_to_start(self) -> None:
        self.cursor_line = 0
        self.cursor_col = 0
        self.scroll_offset = 0

    def move_to_end(self, visible_height: int | None = None) -> None:
        """Jump to the last column of the last line."""
        self.cursor_line = len(self.lines) - 1
        self.cursor_col = self.line_length()
        if visible_height is not None:
            self.scroll_offset = max(0, len(self.lines) - max(1, visible_height))

    # -- scrolling -------------------------------------------------------

    def max_scroll(self, visible_height: int) -> int:
        return max(0, len(self.lines) - max(1, visible_height))

    def scroll_up(self, amount: int) -> int:
        """Scroll the view up by at most ``amount`` lines; return the distance moved."""
        moved = max(0, min(amount, self.scroll_offset))
        self.scroll_offset -= moved
        return moved

    def scroll_down(self, amount: int, visible_height: int) -> int:
        """Scroll the view down by at most ``amount`` lines; return the distance moved."""
        moved = max(0, min(amount, self.max_scroll(visible_height) - self.scroll_offset))
        self.scroll_offset += moved
        return moved

    def follow_viewport(self, visible_height: int) -> None:
        """Pull the cursor onto a row that is currently on screen."""
        top = self.scroll_offset
        bottom = min(len(self.lines) - 1, top + max(1, visible_height) - 1)
        self.cursor_line = max(top, min(self.cursor_line, bottom))
        self.cursor_col = min(self.cursor_col, self.line_length())

    def scroll_up_with_cursor(self, amount: int) -> None:
        """Scroll up and drag the cursor by the same distance."""
        moved = self.scroll_up(amount)
        if self.cursor_line >= moved:
            self.cursor_line -= moved
        else:
            self.cursor_line = self.scroll_offset
        self.cursor_col = min(self.cursor_col, self.line_length())

    def scroll_down_with_cursor(self, amount: int, visible_height: int) -> None:
        """Scroll down and drag the cursor by the same distance."""
        moved = self.scroll_down(amount, visible_height)
        self.cursor_line = min(self.cursor_line + moved, len(self.lines) - 1)
        self.cursor_col = min(self.cursor_col, self.line_length())

    # -- yanking ---------------------------------------------------------

    def yank_line(self) -> str:
        return self.lines[self.cursor_line]

    def yank_to_line_end(self) -> str:
        return self.lines[self.cursor_line][self.cursor_col :]


class EditorBuffer(TextBuffer):
    """Mutable request buffer edited in Insert, Normal and Visual modes."""

    @classmethod
    def from_text(cls, text: str) -> EditorBuffer:
        return cls(lines=_split_text(text))

    def insert_char(self, ch: str) -> None:
        line = self.lines[self.cursor_line]
        self.lines[self.cursor_line] = line[: self.cursor_col] + ch + line[self.cursor_col :]
        self.cursor_col += len(ch)

    def insert_text(self, text: str, visible_height: int | None = None) -> None:
        """Insert ``text`` at the cursor, splitting lines on newlines."""
        for idx, chunk in enumerate(_split_text(text)):
            if idx:
                self.split_line(visible_height)
            if chunk:
                self.insert_char(chunk)

    def backspace(self) -> None:
        """Delete the character left of the cursor, joining lines at column 0."""
        if self.cursor_col > 0:
            line = self.lines[self.cursor_line]
            self.lines[self.cursor_line] = line[: self.cursor_col - 1] + line[self.cursor_col :]
            self.cursor_col -= 1
            return
        if self.cursor_line == 0:
            return
        current = self.lines.pop(self.cursor_line)
        self.cursor_line -= 1
        self.cursor_col = len(self.lines[self.cursor_line])
        self.lines[self.cursor_line] += current
        if self.cursor_line < self.scroll_offset:
            self.scroll_offset = self.cursor_line
        self.clamp()

    def delete_at_cursor(self) -> None:
        """Delete the character under the cursor, joining the next line at line end."""
        line = self.lines[self.cursor_line]
        if self.cursor_col < len(line):
            self.lines[self.cursor_line] = line[: self.cursor_col] + line[self.cursor_col + 1 :]
        elif self.cursor_line + 1 < len(self.lines):
            self.lines[self.cursor_line] = line + self.lines.pop(self.cursor_line + 1)
        self.clamp()

    def split_line(self, visible_height: int | None = None) -> None:
        """Break the line at the cursor (Enter) and keep the cursor visible."""
        line = self.lines[self.cursor_line]
        self.lines[self.cursor_line] = line[: self.cursor_col]
        self.lines.insert(self.cursor_line + 1, line[self.cursor_col :])
        self.cursor_line += 1
        self.cursor_col = 0
        if visible_height is not None:
            visible_height = max(1, visible_height)
            if self.cursor_line >= self.scroll_offset + visible_height:
                self.scroll_offset = self.cursor_line - visible_height + 1

    def join_with_next_line(self) -> None:
        if self.cursor_line + 1 >= len(self.lines):
            return
        current = self.lines[self.cursor_line]
        following = self.lines.pop(self.cursor_line + 1)
        if current and following and not current.endswith(" ") and not following.startswith(" "):
            current += " "
        self.lines[self.cursor_line] = current + following
        self.clamp()

    def delete_to_line_end(self) -> str:
        line = self.lines[self.cursor_line]
        deleted = line[self.cursor_col :]
        self.lines[self.cursor_line] = line[: self.cursor_col]
        return deleted

    def delete_line(self) -> str:
        """Remove the cursor line and return it; the last line is emptied instead."""
        if len(self.lines) == 1:
            deleted = self.lines[0]
            self.lines[0] = ""
            self.cursor_col = 0
            return deleted
        deleted = self.lines.pop(self.cursor_line)
        self.cursor_col = 0
        self.clamp()
        return deleted

    def paste_below(self, text: str) -> None:
        pasted = _split_text(text)
        self.lines[self.cursor_line + 1 : self.cursor_line + 1] = pasted
        self.cursor_line += 1
        self.cursor_col = 0

    def paste_above(self, text: str) -> None:
        pasted = _split_text(text)
        self.lines[self.cursor_line : self.cursor_line] = pasted
        self.cursor_col = 0

    def delete_range(self, start: tuple[int, int], end: tuple[int, int]) -> None:
        """Remove text between two normalized positions (end exclusive)."""
        start_line, start_col = start
        end_line, end_col = end
        head = self.lines[start_line][:start_col]
        tail = self.lines[end_line][end_col:]
        self.lines[start_line : end_line + 1] = [head + tail]
        self.cursor_line = start_line
        self.cursor_col = len(head)
        self.clamp()

    def delete_lines(self, start_line: int, end_line: int) -> None:
        """Remove whole lines ``start_line..end_line`` inclusive."""
        del self.lines[start_line : end_line + 1]
        if not self.lines:
            self.lines = [""]
        self.cursor_line = start_line
        self.cursor_col = 0
        self.clamp()
