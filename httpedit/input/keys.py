"""Keyboard dispatch facade: one handler per editor mode."""

from __future__ import annotations

from collections.abc import Callable

from ..state import Mode
from .key_command import handle_command_key
from .key_common import KeyContext
from .key_insert import handle_insert_key
from .key_normal import handle_normal_key
from .key_visual import handle_visual_key

KeyHandler = Callable[[str, KeyContext], bool]

MODE_HANDLERS: dict[Mode, KeyHandler] = {
    Mode.NORMAL: handle_normal_key,
    Mode.INSERT: handle_insert_key,
    Mode.COMMAND: handle_command_key,
    Mode.VISUAL: handle_visual_key,
    Mode.VISUAL_LINE: handle_visual_key,
}


def handle_key(key: str, context: KeyContext) -> bool:
    """Route ``key`` to the current mode's handler; ``True`` ends the session."""
    return MODE_HANDLERS[context.session.mode](key, context)
