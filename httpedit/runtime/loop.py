"""Main interactive event loop.

One blocking key read per iteration: snapshot, dispatch to the mode handler,
snapshot again, then repaint at the tier the planner picks. Resize tokens skip
the planner and always repaint everything.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..input import RESIZE_KEY, KeyContext, handle_key
from ..input.key_common import fit_views_to_layout
from ..render import RenderTier, ScreenCompositor, capture, plan_render
from ..state import ReplSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected terminal operations used by ``run_main_loop``."""

    read_key: Callable[[], str]
    terminal_size: Callable[[], tuple[int, int]]


def apply_terminal_size(session: ReplSession, size: tuple[int, int]) -> None:
    columns, rows = size
    session.layout.resize(columns, rows, session.has_response)
    fit_views_to_layout(session)


def run_main_loop(
    context: KeyContext,
    terminal,
    compositor: ScreenCompositor,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run until a handler asks to quit or input reaches end of file."""
    session = context.session
    with terminal.raw_mode():
        apply_terminal_size(session, callbacks.terminal_size())
        compositor.render(session, RenderTier.FULL)
        while True:
            key = callbacks.read_key()
            if not key:
                logger.info("input closed, leaving editor")
                return
            if key == RESIZE_KEY:
                apply_terminal_size(session, callbacks.terminal_size())
                logger.debug("terminal resized to %sx%s", session.layout.terminal_width, session.layout.terminal_height)
                compositor.render(session, RenderTier.FULL)
                continue
            before = capture(session)
            if handle_key(key, context):
                logger.info("quit requested")
                return
            compositor.render(session, plan_render(before, capture(session), key))
