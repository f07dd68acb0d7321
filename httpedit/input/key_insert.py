"""Insert-mode keyboard handling."""

from __future__ import annotations

from ..commands import execute_request
from .key_common import (
    KeyContext,
    active_pane_height,
    fit_views_to_layout,
    is_printable_key,
    leave_to_normal,
    resize_split,
    scroll_page,
)

TAB_TEXT = "    "
INSERT_SCROLL_KEYS = frozenset({"PAGE_UP", "PAGE_DOWN", "CTRL_U", "CTRL_D"})


def handle_insert_key(key: str, ctx: KeyContext) -> bool:
    """Edit the request buffer; Insert mode never ends the session."""
    session = ctx.session
    buffer = session.buffer
    height = active_pane_height(session)

    if key == "ESC":
        leave_to_normal(session)
    elif key == "ENTER":
        buffer.split_line(height)
    elif key == "BACKSPACE":
        buffer.backspace()
    elif key == "DELETE":
        buffer.delete_at_cursor()
    elif key == "TAB":
        buffer.insert_text(TAB_TEXT)
    elif key == "LEFT":
        buffer.move_left()
    elif key == "RIGHT":
        buffer.move_right()
    elif key == "UP":
        buffer.move_up()
    elif key == "DOWN":
        buffer.move_down(height)
    elif key == "HOME":
        buffer.move_to_line_start()
    elif key == "END":
        buffer.move_to_line_end()
    elif key in INSERT_SCROLL_KEYS:
        scroll_page(session, key)
    elif key == "CTRL_K":
        resize_split(session, key)
    elif key == "CTRL_J":
        if session.has_response:
            resize_split(session, key)
        else:
            execute_request(session, ctx.dispatcher, ctx.clock)
            fit_views_to_layout(session)
    elif is_printable_key(key):
        buffer.insert_char(key)
    return False
