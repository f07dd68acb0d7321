"""Input-layer public API for key decoding and mode handlers.

Exports are split between low-level terminal decoding (``read_key``) and the
mode dispatch used by the runtime loop (``handle_key``).
"""

from .key_common import KeyContext
from .key_registry import KeyComboBinding, KeyComboRegistry
from .keys import MODE_HANDLERS, handle_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, RESIZE_KEY, read_key, resize_wakeup_pipe

__all__ = [
    "read_key",
    "resize_wakeup_pipe",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "RESIZE_KEY",
    "KeyComboBinding",
    "KeyComboRegistry",
    "KeyContext",
    "MODE_HANDLERS",
    "handle_key",
]
