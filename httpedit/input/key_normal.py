"""Normal-mode keyboard handling."""

from __future__ import annotations

from collections.abc import Callable

from ..editor import SelectionTracker
from ..state import Mode, Pane, ReplSession
from .key_common import (
    PAGE_SCROLL_KEYS,
    KeyContext,
    active_pane_height,
    active_view,
    enter_mode,
    fit_views_to_layout,
    resize_split,
    response_focused,
    scroll_page,
)
from .key_registry import KeyComboBinding, KeyComboRegistry

INVALID_WINDOW_COMMAND = "Invalid window command"
NO_RESPONSE_PANE = "No response pane"


def start_visual(session: ReplSession, mode: Mode) -> None:
    """Anchor a selection at the cursor and enter ``mode``."""
    view = active_view(session)
    if mode is Mode.VISUAL_LINE:
        selection = SelectionTracker.anchored_at(view.cursor_line, 0)
        selection.extend_to(view.cursor_line, view.line_length())
    else:
        selection = SelectionTracker.anchored_at(view.cursor_line, view.cursor_col)
    session.selection = selection
    enter_mode(session, mode)


def _enter_insert(ctx: KeyContext, *, line_start: bool = False, line_end: bool = False) -> None:
    session = ctx.session
    if session.current_pane is not Pane.REQUEST:
        return
    if line_start:
        session.buffer.move_to_line_start()
    elif line_end:
        session.buffer.move_to_line_end()
    enter_mode(session, Mode.INSERT)


def _enter_command(ctx: KeyContext) -> None:
    ctx.session.command_buffer = ""
    enter_mode(ctx.session, Mode.COMMAND)


def _move_down(ctx: KeyContext) -> None:
    active_view(ctx.session).move_down(active_pane_height(ctx.session))


def _move_to_end(ctx: KeyContext) -> None:
    active_view(ctx.session).move_to_end(active_pane_height(ctx.session))


def _begin_g(ctx: KeyContext) -> None:
    ctx.session.pending_g = True


def _begin_ctrl_w(ctx: KeyContext) -> None:
    ctx.session.pending_ctrl_w = True


def _clear_status(ctx: KeyContext) -> None:
    ctx.session.status_message = ""


def _yank_line(ctx: KeyContext) -> None:
    ctx.session.clipboard = active_view(ctx.session).yank_line()


def _request_only(action: Callable[[KeyContext], None]) -> Callable[[KeyContext], None]:
    """Wrap an edit so it only runs while the request pane has focus."""

    def run(ctx: KeyContext) -> None:
        if response_focused(ctx.session):
            return
        action(ctx)
        ctx.session.buffer.clamp_scroll(active_pane_height(ctx.session))

    return run


def _delete_char(ctx: KeyContext) -> None:
    ctx.session.buffer.delete_at_cursor()


def _delete_to_line_end(ctx: KeyContext) -> None:
    deleted = ctx.session.buffer.delete_to_line_end()
    if deleted:
        ctx.session.clipboard = deleted


def _join_lines(ctx: KeyContext) -> None:
    ctx.session.buffer.join_with_next_line()


def _begin_d(ctx: KeyContext) -> None:
    ctx.session.pending_d = True


def _yank_to_line_end(ctx: KeyContext) -> None:
    ctx.session.clipboard = ctx.session.buffer.yank_to_line_end()


def _paste_below(ctx: KeyContext) -> None:
    if ctx.session.clipboard:
        ctx.session.buffer.paste_below(ctx.session.clipboard)


def _paste_above(ctx: KeyContext) -> None:
    if ctx.session.clipboard:
        ctx.session.buffer.paste_above(ctx.session.clipboard)


def _delete_line(ctx: KeyContext) -> None:
    ctx.session.clipboard = ctx.session.buffer.delete_line()


NORMAL_BINDINGS: KeyComboRegistry[KeyContext] = KeyComboRegistry[KeyContext]().register_bindings(
    KeyComboBinding(("i",), lambda ctx: _enter_insert(ctx)),
    KeyComboBinding(("I",), lambda ctx: _enter_insert(ctx, line_start=True)),
    KeyComboBinding(("A",), lambda ctx: _enter_insert(ctx, line_end=True)),
    KeyComboBinding((":",), _enter_command),
    KeyComboBinding(("v",), lambda ctx: start_visual(ctx.session, Mode.VISUAL)),
    KeyComboBinding(("V",), lambda ctx: start_visual(ctx.session, Mode.VISUAL_LINE)),
    KeyComboBinding(("h", "LEFT"), lambda ctx: active_view(ctx.session).move_left()),
    KeyComboBinding(("l", "RIGHT"), lambda ctx: active_view(ctx.session).move_right()),
    KeyComboBinding(("k", "UP"), lambda ctx: active_view(ctx.session).move_up()),
    KeyComboBinding(("j", "DOWN"), _move_down),
    KeyComboBinding(("w",), lambda ctx: active_view(ctx.session).move_word_forward()),
    KeyComboBinding(("b",), lambda ctx: active_view(ctx.session).move_word_backward()),
    KeyComboBinding(("0", "HOME"), lambda ctx: active_view(ctx.session).move_to_line_start()),
    KeyComboBinding(("$", "END"), lambda ctx: active_view(ctx.session).move_to_line_end()),
    KeyComboBinding(("g",), _begin_g),
    KeyComboBinding(("G",), _move_to_end),
    KeyComboBinding(("CTRL_W",), _begin_ctrl_w),
    KeyComboBinding(("ESC",), _clear_status),
    KeyComboBinding(("y",), _yank_line),
    KeyComboBinding(("x", "DELETE"), _request_only(_delete_char)),
    KeyComboBinding(("D",), _request_only(_delete_to_line_end)),
    KeyComboBinding(("J",), _request_only(_join_lines)),
    KeyComboBinding(("d",), _request_only(_begin_d)),
    KeyComboBinding(("Y",), _request_only(_yank_to_line_end)),
    KeyComboBinding(("p",), _request_only(_paste_below)),
    KeyComboBinding(("P",), _request_only(_paste_above)),
)


def _handle_window_command(key: str, session: ReplSession) -> None:
    """Second key of a ``Ctrl+W`` chord."""
    if key == "ESC":
        return
    if key in ("w", "CTRL_W"):
        if session.response is None:
            session.status_message = NO_RESPONSE_PANE
            return
        session.current_pane = Pane.RESPONSE if session.current_pane is Pane.REQUEST else Pane.REQUEST
        return
    if key == "_":
        if session.response is None:
            return
        if session.current_pane is Pane.RESPONSE:
            session.layout.maximize_response()
        else:
            session.layout.maximize_request()
        fit_views_to_layout(session)
        return
    if key == "=":
        if session.layout.reset_split():
            fit_views_to_layout(session)
        return
    session.status_message = INVALID_WINDOW_COMMAND


def handle_normal_key(key: str, ctx: KeyContext) -> bool:
    """Handle one normal-mode key; Normal mode itself never ends the session."""
    session = ctx.session
    if session.pending_ctrl_w:
        session.pending_ctrl_w = False
        _handle_window_command(key, session)
        return False

    pending_g, session.pending_g = session.pending_g, False
    pending_d, session.pending_d = session.pending_d, False
    if pending_g and key == "g":
        active_view(session).move_to_start()
        return False
    if pending_d and key == "d":
        _request_only(_delete_line)(ctx)
        return False

    if key in PAGE_SCROLL_KEYS:
        scroll_page(session, key)
        return False
    if key in ("CTRL_K", "CTRL_J"):
        resize_split(session, key)
        return False
    NORMAL_BINDINGS.dispatch(key, ctx)
    return False
