"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, multi-byte UTF-8 input, and the resize wakeup
pipe that turns SIGWINCH into a ``"RESIZE"`` token.
"""

from __future__ import annotations

import contextlib
import os
import select
import signal
from collections.abc import Iterator

ESC_SEQUENCE_TIMEOUT_MS = 25
RESIZE_KEY = "RESIZE"
UNKNOWN_KEY = "UNKNOWN"
_PENDING_BYTES: list[bytes] = []
_MAX_SEQUENCE_BYTES = 16

_SINGLE_BYTE_KEYS = {
    b"\r": "ENTER",
    b"\n": "CTRL_J",
    b"\t": "TAB",
    b"\x7f": "BACKSPACE",
    b"\x08": "BACKSPACE",
}

_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS = {
    b"1": "HOME",
    b"7": "HOME",
    b"4": "END",
    b"8": "END",
    b"3": "DELETE",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _drain(fd: int) -> None:
    """Empty a non-blocking wakeup pipe."""
    while True:
        try:
            if not os.read(fd, 512):
                return
        except BlockingIOError:
            return


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8(fd: int, lead: bytes) -> str:
    data = bytearray(lead)
    for _ in range(_utf8_length(lead[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def _read_csi(fd: int) -> str:
    """Decode the remainder of ``ESC [`` up to its final byte."""
    params = bytearray()
    while len(params) < _MAX_SEQUENCE_BYTES:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        if 0x40 <= part[0] <= 0x7E:
            if part == b"~":
                return _CSI_TILDE_KEYS.get(bytes(params).split(b";")[0], UNKNOWN_KEY)
            return _CSI_FINAL_KEYS.get(part, UNKNOWN_KEY)
        params += part
    return UNKNOWN_KEY


def read_key(fd: int, timeout_ms: int | None = None, wakeup_fd: int | None = None) -> str:
    """Block for the next key token.

    Returns ``""`` on end of input (or when ``timeout_ms`` elapses) and
    ``"RESIZE"`` when ``wakeup_fd`` becomes readable.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        watched = [fd] if wakeup_fd is None else [fd, wakeup_fd]
        timeout = None if timeout_ms is None else max(0.0, timeout_ms / 1000.0)
        ready, _, _ = select.select(watched, [], [], timeout)
        if not ready:
            return ""
        if wakeup_fd is not None and wakeup_fd in ready:
            _drain(wakeup_fd)
            return RESIZE_KEY
        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in _SINGLE_BYTE_KEYS:
        return _SINGLE_BYTE_KEYS[ch]
    code = ch[0]
    if 0x01 <= code <= 0x1A:
        return f"CTRL_{chr(ord('A') + code - 1)}"
    if code >= 0x80:
        return _read_utf8(fd, ch)
    if ch != b"\x1b":
        return ch.decode("ascii", errors="replace")

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ESC"
        return _CSI_FINAL_KEYS.get(final, UNKNOWN_KEY)
    _PENDING_BYTES.append(seq)
    return "ESC"


def _ignore_signal(signum, frame) -> None:
    return None


@contextlib.contextmanager
def resize_wakeup_pipe() -> Iterator[int]:
    """Route SIGWINCH into a pipe and yield its read end for :func:`read_key`."""
    read_fd, write_fd = os.pipe()
    os.set_blocking(read_fd, False)
    os.set_blocking(write_fd, False)
    previous_handler = signal.signal(signal.SIGWINCH, _ignore_signal)
    previous_fd = signal.set_wakeup_fd(write_fd)
    try:
        yield read_fd
    finally:
        signal.set_wakeup_fd(previous_fd)
        signal.signal(
            signal.SIGWINCH,
            previous_handler if previous_handler is not None else signal.SIG_DFL,
        )
        os.close(read_fd)
        os.close(write_fd)
