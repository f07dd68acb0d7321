"""Decide how much of the screen a keystroke needs repainted.

The planner is a pure function of two snapshots and the key token, so the
event loop can capture state before a handler runs, capture again after, and
ask for the cheapest correct repaint.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from ..state import Mode, Pane, ReplSession

FULL_REPAINT_MODES = frozenset({Mode.COMMAND, Mode.VISUAL, Mode.VISUAL_LINE})
FULL_REPAINT_KEYS = frozenset({"CTRL_U", "CTRL_D", "CTRL_F", "CTRL_B", "PAGE_UP", "PAGE_DOWN"})
PANE_REPAINT_KEYS = frozenset({"ENTER", "BACKSPACE", "DELETE"})
NORMAL_EDIT_KEYS = frozenset({"x", "D", "J", "p", "P", "d"})


class RenderTier(IntEnum):
    CURSOR = 1
    PANE = 2
    FULL = 3


@dataclass(frozen=True)
class RenderSnapshot:
    mode: Mode
    pane: Pane
    request_scroll: int
    response_scroll: int | None
    split_ratio: float
    status: str = ""


def capture(session: ReplSession) -> RenderSnapshot:
    response = session.response
    return RenderSnapshot(
        mode=session.mode,
        pane=session.current_pane,
        request_scroll=session.buffer.scroll_offset,
        response_scroll=response.scroll_offset if response is not None else None,
        split_ratio=session.layout.split_ratio,
        status=session.status_message,
    )


def plan_render(before: RenderSnapshot, after: RenderSnapshot, key: str) -> RenderTier:
    """Classify the repaint needed after ``key`` moved state from ``before`` to ``after``."""
    if (
        before.mode is not after.mode
        or before.pane is not after.pane
        or after.mode in FULL_REPAINT_MODES
        or before.request_scroll != after.request_scroll
        or before.response_scroll != after.response_scroll
        or before.split_ratio != after.split_ratio
        or key in FULL_REPAINT_KEYS
    ):
        return RenderTier.FULL
    if key in PANE_REPAINT_KEYS:
        return RenderTier.PANE
    if after.mode is Mode.INSERT and (key == "TAB" or (len(key) == 1 and key.isprintable())):
        return RenderTier.PANE
    if after.mode is Mode.NORMAL and key in NORMAL_EDIT_KEYS:
        return RenderTier.PANE
    if before.status != after.status:
        return RenderTier.PANE
    return RenderTier.CURSOR
