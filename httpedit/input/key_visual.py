"""Visual and visual-line keyboard handling.

Motions move the cursor of the focused pane and drag the selection end with
it. ``y`` copies the selection, ``d`` copies it and removes it from the
request buffer; both return to Normal mode.
"""

from __future__ import annotations

from ..state import Mode, ReplSession
from .key_common import (
    KeyContext,
    active_pane_height,
    active_view,
    enter_mode,
    leave_to_normal,
    response_focused,
)

_MOTIONS = {
    "h": "left",
    "LEFT": "left",
    "l": "right",
    "RIGHT": "right",
    "k": "up",
    "UP": "up",
    "j": "down",
    "DOWN": "down",
    "w": "word_forward",
    "b": "word_backward",
    "0": "line_start",
    "HOME": "line_start",
    "$": "line_end",
    "END": "line_end",
    "G": "end",
}


def _sync_selection_end(session: ReplSession) -> None:
    view = active_view(session)
    if session.selection is None:
        return
    if session.mode is Mode.VISUAL_LINE:
        session.selection.extend_to(view.cursor_line, view.line_length())
    else:
        session.selection.extend_to(view.cursor_line, view.cursor_col)


def _apply_motion(session: ReplSession, motion: str) -> None:
    view = active_view(session)
    height = active_pane_height(session)
    if motion == "left":
        view.move_left()
    elif motion == "right":
        view.move_right()
    elif motion == "up":
        view.move_up()
    elif motion == "down":
        view.move_down(height)
    elif motion == "word_forward":
        view.move_word_forward()
    elif motion == "word_backward":
        view.move_word_backward()
    elif motion == "line_start":
        view.move_to_line_start()
    elif motion == "line_end":
        view.move_to_line_end()
    elif motion == "end":
        view.move_to_end(height)
    view.clamp_scroll(height)


def _switch_visual_kind(session: ReplSession, mode: Mode) -> None:
    enter_mode(session, mode)
    selection = session.selection
    if selection is None:
        return
    if mode is Mode.VISUAL_LINE:
        selection.start_col = 0
    _sync_selection_end(session)


def _copy_selection(session: ReplSession, *, remove: bool) -> None:
    selection = session.selection
    if selection is None:
        return
    view = active_view(session)
    line_mode = session.mode is Mode.VISUAL_LINE
    selection.clamp(view.lines)
    session.clipboard = selection.selected_text(view.lines, line_mode=line_mode)
    if not remove or response_focused(session):
        return
    buffer = session.buffer
    if line_mode:
        first_line, last_line = selection.line_span()
        buffer.delete_lines(first_line, last_line)
    else:
        first, last = selection.normalized()
        buffer.delete_range(first, last)
    buffer.clamp_scroll(active_pane_height(session))


def handle_visual_key(key: str, ctx: KeyContext) -> bool:
    """Handle one key in Visual or VisualLine mode."""
    session = ctx.session
    if key == "ESC":
        leave_to_normal(session)
    elif key == "v":
        if session.mode is Mode.VISUAL:
            leave_to_normal(session)
        else:
            _switch_visual_kind(session, Mode.VISUAL)
    elif key == "V":
        if session.mode is Mode.VISUAL:
            _switch_visual_kind(session, Mode.VISUAL_LINE)
        else:
            _switch_visual_kind(session, Mode.VISUAL)
    elif key in ("y", "d"):
        _copy_selection(session, remove=key == "d")
        leave_to_normal(session)
    elif key in _MOTIONS:
        _apply_motion(session, _MOTIONS[key])
        _sync_selection_end(session)
    return False
