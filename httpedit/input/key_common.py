"""Shared key-handling context and helper functions."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from ..dispatch import RequestDispatcher
from ..editor import TextBuffer
from ..state import MODE_LABELS, Mode, Pane, ReplSession

PAGE_SCROLL_KEYS = frozenset({"CTRL_U", "CTRL_D", "CTRL_F", "CTRL_B", "PAGE_UP", "PAGE_DOWN"})


@dataclass
class KeyContext:
    """Session plus the collaborators a key handler may call into."""

    session: ReplSession
    dispatcher: RequestDispatcher
    clock: Callable[[], float] = field(default=time.monotonic)


def is_printable_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def response_focused(session: ReplSession) -> bool:
    return session.current_pane is Pane.RESPONSE and session.response is not None


def active_view(session: ReplSession) -> TextBuffer:
    """Return the buffer under the cursor: response view or request buffer."""
    if response_focused(session):
        return session.response
    return session.buffer


def active_pane_height(session: ReplSession) -> int:
    """Return the row count of the focused pane (at least one)."""
    layout = session.layout
    if response_focused(session):
        return max(1, layout.response_height())
    return max(1, layout.request_height(session.has_response))


def fit_views_to_layout(session: ReplSession) -> None:
    """Re-clamp both panes' scroll offsets after the split or terminal changed."""
    layout = session.layout
    session.buffer.clamp_scroll(layout.request_height(session.has_response))
    if session.response is not None:
        session.response.clamp_scroll(max(1, layout.response_height()))


def resize_split(session: ReplSession, key: str) -> None:
    """``CTRL_K`` moves the boundary down, ``CTRL_J`` moves it up."""
    if session.response is None:
        return
    layout = session.layout
    if session.current_pane is Pane.RESPONSE:
        changed = layout.shrink_response() if key == "CTRL_K" else layout.expand_response()
    else:
        changed = layout.expand_request() if key == "CTRL_K" else layout.shrink_request()
    if changed:
        fit_views_to_layout(session)


def enter_mode(session: ReplSession, mode: Mode) -> None:
    session.mode = mode
    session.status_message = MODE_LABELS.get(mode, "")


def leave_to_normal(session: ReplSession, *, keep_status: bool = False) -> None:
    """Return to Normal mode, dropping any selection and pending command text."""
    session.mode = Mode.NORMAL
    session.selection = None
    session.command_buffer = ""
    if not keep_status:
        session.status_message = ""


def scroll_page(session: ReplSession, key: str) -> None:
    """Apply a page-scroll key to the focused pane.

    ``CTRL_U``/``CTRL_D`` move half a page and ``CTRL_F``/``CTRL_B`` a full
    page with the cursor following; ``PAGE_UP``/``PAGE_DOWN`` move the view
    half a page and leave the cursor alone unless it scrolls off screen.
    """
    view = active_view(session)
    height = active_pane_height(session)
    half = max(1, height // 2)
    if key == "CTRL_U":
        view.scroll_up_with_cursor(half)
    elif key == "CTRL_D":
        view.scroll_down_with_cursor(half, height)
    elif key == "CTRL_B":
        view.scroll_up_with_cursor(height)
    elif key == "CTRL_F":
        view.scroll_down_with_cursor(height, height)
    elif key == "PAGE_UP":
        view.scroll_up(half)
        view.follow_viewport(height)
    elif key == "PAGE_DOWN":
        view.scroll_down(half, height)
        view.follow_viewport(height)
