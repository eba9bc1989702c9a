"""Shared output device used by every region of the canvas.

``Console`` owns the physical cursor and a shadow grid of the visible cells.
Regions never assume where the cursor is; they move it explicitly before
each write. Output is emitted as absolute cursor moves plus text, never as
newlines, so the terminal never scrolls underneath the canvas.
"""

from __future__ import annotations

from collections.abc import Callable

from .ansi import ANSI_ESCAPE_RE, char_display_width, clip_ansi_line, strip_ansi

RESET = "\033[0m"


class Console:
    """Cursor-tracking writer over a fixed ``width`` x ``height`` screen.

    ``emit`` receives the escape/text stream for the real terminal. When it
    is ``None`` the console only updates its shadow grid, which is what
    tests inspect.
    """

    def __init__(self, width: int, height: int, emit: Callable[[str], None] | None = None) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid console size: {width}x{height}")
        self.width = width
        self.height = height
        self._emit = emit
        self.cursor_col = 0
        self.cursor_row = 0
        self._cells = [[" "] * width for _ in range(height)]

    def _send(self, payload: str) -> None:
        if self._emit is not None and payload:
            self._emit(payload)

    def move_to(self, col: int, row: int) -> None:
        """Place the physical cursor, clamped to the screen."""
        self.cursor_col = max(0, min(col, self.width - 1))
        self.cursor_row = max(0, min(row, self.height - 1))
        self._send(f"\033[{self.cursor_row + 1};{self.cursor_col + 1}H")

    def put(self, text: str) -> None:
        """Write ``text`` at the cursor without moving to a new line.

        Text past the right edge is clipped. The cursor ends one cell after
        the last written column, or on the last column when the row is full.
        """
        clipped = clip_ansi_line(text, self.width - self.cursor_col)
        if not clipped:
            return
        row = self._cells[self.cursor_row]
        col = self.cursor_col
        for ch in strip_ansi(clipped):
            w = char_display_width(ch, col)
            if w == 0:
                continue
            row[col] = ch
            for extra in range(1, w):
                row[col + extra] = ""
            col += w
        self.cursor_col = min(col, self.width - 1)
        if ANSI_ESCAPE_RE.search(clipped):
            clipped += RESET
        self._send(clipped)
        if col >= self.width:
            # Leave the terminal's pending-wrap state so both cursors agree.
            self.move_to(self.cursor_col, self.cursor_row)

    def newline(self) -> None:
        """Move to column 0 of the next row, stopping at the bottom row."""
        self.move_to(0, self.cursor_row + 1)

    def erase_left(self) -> None:
        """Blank the cell left of the cursor and step back onto it."""
        if self.cursor_col == 0:
            return
        self.move_to(self.cursor_col - 1, self.cursor_row)
        self.put(" ")
        self.move_to(self.cursor_col - 1, self.cursor_row)

    def clear(self) -> None:
        """Blank the whole screen and home the cursor."""
        self._cells = [[" "] * self.width for _ in range(self.height)]
        self.cursor_col = 0
        self.cursor_row = 0
        self._send("\033[2J\033[H")

    def row_text(self, row: int) -> str:
        """Return the visible content of ``row`` with trailing blanks removed."""
        return "".join(self._cells[row]).rstrip()

    def screen_text(self) -> list[str]:
        return [self.row_text(row) for row in range(self.height)]
