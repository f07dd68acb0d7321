"""Terminal control helpers for the editor session.

Owns the raw-mode lifecycle, alternate-screen switching and cursor shape.
Restoring the terminal happens on every exit path through ``raw_mode``.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

from .ansi import (
    CLEAR_SCREEN,
    CURSOR_SHAPE_DEFAULT,
    ENTER_ALT_SCREEN,
    HIDE_CURSOR,
    LEAVE_ALT_SCREEN,
    SHOW_CURSOR,
)


class TerminalController:
    """Manage terminal mode transitions for one stdin/stdout pair."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8", errors="replace"))

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)`` of the controlling terminal."""
        try:
            term = os.get_terminal_size(self.stdout_fd)
        except OSError:
            term = shutil.get_terminal_size((80, 24))
        return term.columns, term.lines

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with a cleared screen."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self.write(f"{ENTER_ALT_SCREEN}{HIDE_CURSOR}{CLEAR_SCREEN}")

    def disable_tui_mode(self) -> None:
        """Restore the cursor, the main screen buffer and the saved tty state."""
        self.write(f"{CURSOR_SHAPE_DEFAULT}{SHOW_CURSOR}{LEAVE_ALT_SCREEN}")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
