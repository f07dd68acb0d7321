"""Screen composition for the request/response split view.

Each ``render`` call assembles one frame fragment as a list of strings and
hands it to the writer in a single call. Row layout, top to bottom: request
pane, separator (only with a response), response pane, status line.
"""

from __future__ import annotations

from collections.abc import Callable

from ..ansi import (
    CLEAR_LINE,
    CURSOR_SHAPE_BAR,
    CURSOR_SHAPE_BLOCK,
    HIDE_CURSOR,
    SHOW_CURSOR,
    display_width,
    iter_display_cells,
    move_to,
)
from ..editor import TextBuffer
from ..state import Mode, Pane, ReplSession
from ..ui_theme import DEFAULT_THEME, UITheme
from .planner import RenderTier

MIN_GUTTER_DIGITS = 3
SEPARATOR_CHAR = "─"


def gutter_width(line_count: int) -> int:
    """Return line-number columns plus the separating space."""
    return max(MIN_GUTTER_DIGITS, len(str(max(1, line_count)))) + 1


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    """Lay out left and right status text, truncated to the terminal width."""
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1) if right_text else usable
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


class ScreenCompositor:
    """Paint a :class:`ReplSession` at the tier the planner chose."""

    def __init__(self, write: Callable[[str], None], theme: UITheme = DEFAULT_THEME) -> None:
        self._write = write
        self.theme = theme

    def render(self, session: ReplSession, tier: RenderTier) -> None:
        out: list[str] = []
        if tier is RenderTier.CURSOR:
            out.append(self._cursor_position(session))
            self._write("".join(out))
            return

        out.append(HIDE_CURSOR)
        if tier is RenderTier.FULL:
            self._paint_request(session, out)
            if session.response is not None:
                self._paint_separator(session, out)
                self._paint_response(session, out)
        elif session.current_pane is Pane.RESPONSE and session.response is not None:
            self._paint_response(session, out)
        else:
            self._paint_request(session, out)
        self._paint_status(session, out)
        if tier is RenderTier.FULL:
            out.append(CURSOR_SHAPE_BAR if session.mode is Mode.INSERT else CURSOR_SHAPE_BLOCK)
        out.append(self._cursor_position(session))
        out.append(SHOW_CURSOR)
        self._write("".join(out))

    # -- geometry ----------------------------------------------------------

    def _request_rows(self, session: ReplSession) -> int:
        return session.layout.request_height(session.has_response)

    def _response_top(self, session: ReplSession) -> int:
        return self._request_rows(session) + 1

    def _status_row(self, session: ReplSession) -> int:
        return max(0, session.layout.terminal_height - 1)

    def _cursor_position(self, session: ReplSession) -> str:
        width = session.layout.terminal_width
        if session.mode is Mode.COMMAND:
            col = display_width(f":{session.command_buffer}")
            return move_to(self._status_row(session), min(col, max(0, width - 1)))
        if session.current_pane is Pane.RESPONSE and session.response is not None:
            view: TextBuffer = session.response
            top = self._response_top(session)
        else:
            view = session.buffer
            top = 0
        line = view.lines[view.cursor_line]
        col = gutter_width(len(view.lines)) + display_width(line[: view.cursor_col])
        row = top + max(0, view.cursor_line - view.scroll_offset)
        return move_to(row, min(col, max(0, width - 1)))

    # -- painting ----------------------------------------------------------

    def _paint_request(self, session: ReplSession, out: list[str]) -> None:
        focused = session.current_pane is Pane.REQUEST or session.response is None
        self._paint_view(session, session.buffer, 0, self._request_rows(session), focused, out)

    def _paint_response(self, session: ReplSession, out: list[str]) -> None:
        focused = session.current_pane is Pane.RESPONSE
        rows = session.layout.response_height()
        self._paint_view(session, session.response, self._response_top(session), rows, focused, out)

    def _paint_separator(self, session: ReplSession, out: list[str]) -> None:
        theme = self.theme
        row = self._request_rows(session)
        out.append(move_to(row, 0))
        out.append(CLEAR_LINE)
        out.append(theme.separator)
        out.append(SEPARATOR_CHAR * max(0, session.layout.terminal_width))
        out.append(theme.reset)

    def _paint_view(
        self,
        session: ReplSession,
        view: TextBuffer,
        top: int,
        rows: int,
        focused: bool,
        out: list[str],
    ) -> None:
        theme = self.theme
        width = session.layout.terminal_width
        digits = gutter_width(len(view.lines)) - 1
        text_cols = max(0, width - digits - 1)
        text_color = theme.text_active if focused else theme.text_inactive
        selection = session.selection if focused and session.mode.is_visual else None
        line_mode = session.mode is Mode.VISUAL_LINE

        for offset in range(max(0, rows)):
            line_idx = view.scroll_offset + offset
            out.append(move_to(top + offset, 0))
            out.append(CLEAR_LINE)
            if line_idx >= len(view.lines):
                continue
            out.append(theme.gutter)
            out.append(f"{line_idx + 1:>{digits}} ")
            out.append(theme.reset)
            if text_cols <= 0:
                continue
            out.append(text_color)
            text = view.lines[line_idx]
            for char_idx, rendered in iter_display_cells(text, text_cols):
                if selection is not None and selection.covers(line_idx, char_idx, line_mode=line_mode):
                    out.append(theme.selection)
                    out.append(rendered)
                    out.append(theme.reset)
                    out.append(text_color)
                else:
                    out.append(rendered)
            if not text and selection is not None and line_mode and selection.covers(line_idx, 0, line_mode=True):
                out.append(theme.selection)
                out.append(" ")
            out.append(theme.reset)

    def _paint_status(self, session: ReplSession, out: list[str]) -> None:
        theme = self.theme
        if session.mode is Mode.COMMAND:
            left = f":{session.command_buffer}"
        else:
            left = session.status_message
        right = session.last_response_status or ""
        if right and session.last_request_duration_ms is not None:
            right = f"{right} ({session.last_request_duration_ms}ms)"
        color = theme.status_error if session.last_response_status == "Error" else theme.status
        out.append(move_to(self._status_row(session), 0))
        out.append(CLEAR_LINE)
        out.append(color)
        out.append(build_status_line(left, session.layout.terminal_width, right))
        out.append(theme.reset)
