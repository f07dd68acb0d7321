"""Command-line (``:``) keyboard handling."""

from __future__ import annotations

from ..commands import execute_command
from .key_common import KeyContext, fit_views_to_layout, is_printable_key, leave_to_normal


def handle_command_key(key: str, ctx: KeyContext) -> bool:
    """Edit or run the command buffer; return ``True`` when a command quits."""
    session = ctx.session
    if key == "ESC":
        leave_to_normal(session)
        return False
    if key == "ENTER":
        text = session.command_buffer
        session.status_message = ""
        should_quit = execute_command(text, session, ctx.dispatcher, ctx.clock)
        leave_to_normal(session, keep_status=True)
        fit_views_to_layout(session)
        return should_quit
    if key == "BACKSPACE":
        if not session.command_buffer:
            leave_to_normal(session)
        else:
            session.command_buffer = session.command_buffer[:-1]
        return False
    if is_printable_key(key):
        session.command_buffer += key
    return False
