"""Runtime package: editor bootstrap and the interactive event loop."""

from .app import build_session, run_repl
from .loop import RuntimeLoopCallbacks, apply_terminal_size, run_main_loop

__all__ = [
    "RuntimeLoopCallbacks",
    "apply_terminal_size",
    "build_session",
    "run_main_loop",
    "run_repl",
]
