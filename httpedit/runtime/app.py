"""Editor bootstrap: session, terminal, compositor and resize pipe."""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping

from ..dispatch import RequestDispatcher
from ..editor import EditorBuffer
from ..input import KeyContext, read_key, resize_wakeup_pipe
from ..render import ScreenCompositor
from ..state import ReplSession
from ..terminal import TerminalController
from ..ui_theme import DEFAULT_THEME, UITheme
from .loop import RuntimeLoopCallbacks, run_main_loop

logger = logging.getLogger(__name__)


def build_session(
    initial_text: str = "",
    *,
    verbose: bool = False,
    session_headers: Mapping[str, str] | None = None,
) -> ReplSession:
    session = ReplSession(buffer=EditorBuffer.from_text(initial_text), verbose=verbose)
    session.session_headers.update(session_headers or {})
    return session


def run_repl(
    dispatcher: RequestDispatcher,
    initial_text: str = "",
    *,
    theme: UITheme = DEFAULT_THEME,
    verbose: bool = False,
    session_headers: Mapping[str, str] | None = None,
) -> ReplSession:
    """Run the interactive editor on the process's terminal and return the final session."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    session = build_session(initial_text, verbose=verbose, session_headers=session_headers)
    terminal = TerminalController(stdin_fd, stdout_fd)
    compositor = ScreenCompositor(terminal.write, theme)
    context = KeyContext(session=session, dispatcher=dispatcher)
    logger.info("starting editor with theme %s", theme.name)
    with resize_wakeup_pipe() as wakeup_fd:
        callbacks = RuntimeLoopCallbacks(
            read_key=lambda: read_key(stdin_fd, wakeup_fd=wakeup_fd),
            terminal_size=terminal.size,
        )
        run_main_loop(context, terminal, compositor, callbacks)
    return session
