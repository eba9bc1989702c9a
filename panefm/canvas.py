"""Fixed partition of the terminal into the four canvas bands.

Band boundaries are computed once from the terminal height at startup:
header, directory tree, info output and command input, top to bottom.
"""

from __future__ import annotations

from dataclasses import dataclass

from .console import Console
from .region import Region
from .theme import DEFAULT_THEME, UITheme

MIN_CANVAS_HEIGHT = 12


class CanvasTooSmallError(ValueError):
    """The terminal has too few rows for every band."""


@dataclass(frozen=True)
class CanvasLayout:
    """Boundary rows of each band; consecutive bands share a boundary row."""

    header: tuple[int, int]
    tree: tuple[int, int]
    info: tuple[int, int]
    input: tuple[int, int]

    def boundaries(self) -> tuple[int, ...]:
        return (self.header[0], self.tree[0], self.info[0], self.input[0], self.input[1])


def compute_layout(height: int) -> CanvasLayout:
    """Split ``height`` rows into non-overlapping bands covering ``0..height-1``.

    The input band keeps at least two writable rows and the info band about a
    quarter of the screen; the tree band takes what is left.
    """
    if height < MIN_CANVAS_HEIGHT:
        raise CanvasTooSmallError(f"terminal too small: need at least {MIN_CANVAS_HEIGHT} rows, got {height}")
    last = height - 1
    input_rows = max(2, height // 8)
    info_rows = max(3, height // 4)
    info_bottom = last - input_rows - 1
    tree_bottom = info_bottom - info_rows - 1
    return CanvasLayout(
        header=(0, 1),
        tree=(1, tree_bottom),
        info=(tree_bottom, info_bottom),
        input=(info_bottom, last),
    )


class Canvas:
    """Owns the regions drawn on one console for the whole session."""

    def __init__(self, console: Console, header_text: str = "", theme: UITheme = DEFAULT_THEME) -> None:
        self.console = console
        self.theme = theme
        self.layout = compute_layout(console.height)
        self.header = Region(
            console,
            *self.layout.header,
            bottom_border=True,
            header=header_text,
            border_style=theme.border,
            header_style=theme.header,
        )
        self.tree = Region(console, *self.layout.tree)
        self.info = Region(
            console,
            *self.layout.info,
            top_border=True,
            bottom_border=True,
            border_style=theme.border,
        )
        self.input = Region(console, *self.layout.input)
        self.regions: tuple[Region, ...] = (self.header, self.tree, self.info, self.input)

    def draw_all(self) -> None:
        for region in self.regions:
            region.draw()

    def clear_all(self) -> None:
        """Forget every region's buffered lines, wipe the screen and redraw."""
        for region in self.regions:
            region.lines.clear()
        self.console.clear()
        self.draw_all()

    def report_error(self, error: BaseException, region: Region | None = None) -> None:
        """Render ``error`` and its chained cause as one ``Error:`` line."""
        target = region if region is not None else self.info
        target.write_line(format_error(error), style=self.theme.error)


def format_error(error: BaseException) -> str:
    inner = error.__cause__ if error.__cause__ is not None else error.__context__
    inner_message = str(inner) if inner is not None else ""
    return f"Error: {error} {inner_message}".rstrip()
