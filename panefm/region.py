"""One horizontal band of the canvas with its own cursor memory.

Every region behaves as an append-only log that clears itself when it runs
out of rows. Because all regions share one physical cursor, each write first
restores the cursor this region saved last time, and saves it again after.
"""

from __future__ import annotations

from .ansi import clip_ansi_line
from .console import Console


class Region:
    """Band of rows ``top``..``bottom`` on a shared ``Console``."""

    def __init__(
        self,
        console: Console,
        top: int,
        bottom: int,
        *,
        top_border: bool = False,
        bottom_border: bool = False,
        header: str = "",
        top_fill: str = "-",
        bottom_fill: str = "-",
        border_style: str = "",
        header_style: str = "",
    ) -> None:
        if top >= bottom:
            raise ValueError(f"region top must be above bottom: {top} >= {bottom}")
        self.console = console
        self.top = top
        self.bottom = bottom
        self.top_border = top_border
        self.bottom_border = bottom_border
        self.header = header
        self.top_fill = top_fill
        self.bottom_fill = bottom_fill
        self.border_style = border_style
        self.header_style = header_style
        self.lines: list[str] = []
        self.saved_col = 0
        self.saved_row = self.first_writable_row()

    def max_rows(self) -> int:
        return self.bottom - self.top - 1

    def first_writable_row(self) -> int:
        """First row available for text.

        A region exactly one row tall writes on ``top`` and never reserves a
        header row. Otherwise the header, when present, takes the row under
        the top boundary.
        """
        if self.max_rows() == 1:
            return self.top
        if self.header:
            return self.top + 2
        return self.top + 1

    def last_writable_row(self) -> int:
        return self.bottom - 1

    def _styled(self, text: str, style: str) -> str:
        if not style:
            return text
        return f"{style}{text}\033[0m"

    def draw(self) -> None:
        """Render borders and header, then home the cursor."""
        width = self.console.width
        if self.top_border:
            self.console.move_to(0, self.top)
            self.console.put(self._styled(self.top_fill * width, self.border_style))
        if self.bottom_border:
            self.console.move_to(0, self.bottom)
            self.console.put(self._styled(self.bottom_fill * width, self.border_style))
        if self.header:
            header_row = self.top + 1
            if self.top == 0 and not self.top_border:
                header_row = 0
            self.console.move_to(0, header_row)
            self.console.put(self._styled(self.header, self.header_style))
        self.home()

    def home(self) -> None:
        """Move the cursor to the first writable row and remember it."""
        self.console.move_to(0, self.first_writable_row())
        self.save_cursor()

    def save_cursor(self, col: int | None = None, row: int | None = None) -> None:
        """Remember the given position, or the physical cursor when omitted."""
        self.saved_col = self.console.cursor_col if col is None else col
        self.saved_row = self.console.cursor_row if row is None else row

    def restore_cursor(self) -> None:
        self.console.move_to(self.saved_col, self.saved_row)

    def clear_and_home(self) -> None:
        """Blank every writable row and home the cursor."""
        blank = " " * self.console.width
        for row in range(self.first_writable_row(), self.last_writable_row() + 1):
            self.console.move_to(0, row)
            self.console.put(blank)
        self.home()

    def is_active(self) -> bool:
        """Whether the physical cursor sits strictly inside this band."""
        return self.top < self.console.cursor_row < self.bottom

    def _prepare_write(self) -> None:
        self.restore_cursor()
        if self.console.cursor_row >= self.last_writable_row():
            self.clear_and_home()

    def write_line(self, text: str = "", style: str = "") -> None:
        """Append one line, clearing the band first when it is full."""
        self._prepare_write()
        self.console.put(self._styled(text, style))
        self.console.newline()
        self.save_cursor()
        self.lines.append(text)

    def write(self, text: str = "", style: str = "") -> None:
        """Append text without a line break.

        The physical cursor stays after ``text`` so typed input follows it,
        while the saved position moves to the next row as if a newline had
        been written. Text is clipped one column short of the right edge so
        the cursor never parks past the end of the row.
        """
        self._prepare_write()
        row = self.console.cursor_row
        room = self.console.width - self.console.cursor_col - 1
        self.console.put(self._styled(clip_ansi_line(text, room), style))
        self.save_cursor(0, row + 1)
        self.lines.append(text)
