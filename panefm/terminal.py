"""Terminal control helpers for the interactive session.

Owns raw-mode lifecycle and alternate-screen switching, plus the
best-effort request to maximize the terminal window.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

# xterm window manipulation: maximize the window.
MAXIMIZE_WINDOW_SEQUENCE = b"\x1b[9;1t"


class TerminalController:
    """Manage terminal mode transitions for one stdin/stdout pair."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw mode on the alternate screen with a visible cursor."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[2J\x1b[H\x1b[?25h")

    def disable_tui_mode(self) -> None:
        """Restore the main screen buffer and the saved tty state."""
        os.write(self.stdout_fd, b"\x1b[0m\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8"))

    def maximize_window(self) -> bool:
        """Ask the terminal emulator to maximize; failures are ignored."""
        try:
            os.write(self.stdout_fd, MAXIMIZE_WINDOW_SEQUENCE)
        except OSError:
            return False
        return True

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
