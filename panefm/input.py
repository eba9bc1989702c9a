"""Low-level terminal input decoding and single-line editing.

Reads raw bytes from stdin and translates them into normalized key tokens.
``LineEditor`` builds a command line out of those tokens, echoing typed
characters at the physical cursor.
"""

from __future__ import annotations

import os
import select
from collections.abc import Callable

from .console import Console

ESC_SEQUENCE_TIMEOUT_MS = 25

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\x15": "CTRL_U",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_ARROWS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def read_key(fd: int) -> str:
    """Block for one key press and return its token.

    Printable input comes back as the character itself; end of input is
    reported as ``CTRL_D``.
    """
    ch = os.read(fd, 1)
    if not ch:
        return "CTRL_D"
    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        raw = ch
        for _ in range(_utf8_length(ch[0]) - 1):
            more = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            if more is None:
                break
            raw += more
        return raw.decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq != b"[":
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in _ARROWS:
        return _ARROWS[seq]
    # Swallow the rest of an unsupported CSI sequence.
    while seq is not None and not (0x40 <= seq[0] <= 0x7E):
        seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    return "ESC"


class LineEditor:
    """Collect one input line from key tokens, echoing on ``console``."""

    def __init__(self, console: Console, read_key: Callable[[], str], echo_style: str = "") -> None:
        self.console = console
        self.read_key = read_key
        self.echo_style = echo_style

    def _echo(self, text: str) -> None:
        self.console.put(f"{self.echo_style}{text}" if self.echo_style else text)

    def read_line(self) -> str | None:
        """Return the typed line on Enter, or ``None`` on Ctrl+C / Ctrl+D at an empty line."""
        buffer: list[str] = []
        while True:
            key = self.read_key()
            if key == "ENTER":
                return "".join(buffer)
            if key == "CTRL_C" or (key == "CTRL_D" and not buffer):
                return None
            if key == "BACKSPACE":
                if buffer:
                    buffer.pop()
                    self.console.erase_left()
                continue
            if key == "CTRL_U":
                while buffer:
                    buffer.pop()
                    self.console.erase_left()
                continue
            if key == "TAB":
                key = " "
            if len(key) == 1 and key.isprintable():
                buffer.append(key)
                self._echo(key)
