"""Directory-tree listing shown one page at a time in the tree band."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .fs import FsError, FsOperationError, current_directory, list_subdirectories, not_found
from .region import Region

INDENT = "    "
BRANCH = "|___"
CONTINUE_KEY = " "
TRAILER_ROWS = 3

LAST_PAGE_TEXT = "Last page."
NEXT_PAGE_TEXT = "Press Space for the next page."
STOP_PAGING_TEXT = "Press any other key to return to the command line."
SHORTENED_PAGE_TEXT = "({lines} lines per page to fit the window, {requested} requested.)"


def tree_line(name: str, depth: int) -> str:
    return f"{INDENT * depth}{BRANCH}{name}"


def build_tree_lines(root: Path, on_error: Callable[[FsError], None]) -> list[str]:
    """Flatten the directory hierarchy under ``root`` in depth-first pre-order.

    Siblings keep the order the filesystem reports them in, so the output is
    not sorted. An unreadable directory keeps its own line, reports the
    failure and contributes no children.
    """
    lines: list[str] = []

    def walk(directory: Path, depth: int) -> None:
        lines.append(tree_line(directory.name or str(directory), depth))
        children, error = list_subdirectories(directory)
        if error is not None:
            on_error(error)
            return
        for child in children:
            walk(child, depth + 1)

    walk(root, 0)
    return lines


@dataclass
class PageState:
    """Buffered tree lines plus the index of the last line shown."""

    lines: list[str] = field(default_factory=list)
    last_shown: int | None = None

    def next_index(self) -> int:
        return (self.last_shown if self.last_shown is not None else -1) + 1

    def at_end(self) -> bool:
        return self.next_index() >= len(self.lines)


class Paginator:
    """Emit a prebuilt tree listing to ``region`` page by page."""

    def __init__(
        self,
        region: Region,
        on_error: Callable[[FsError], None],
        page_size: int = 10,
        hint_style: str = "",
    ) -> None:
        self.region = region
        self.on_error = on_error
        self.page_size = page_size if page_size > 0 else 10
        self.hint_style = hint_style
        self.state = PageState()

    def effective_page_size(self) -> int:
        """Lines per page that still leave room for the trailer in the band."""
        capacity = self.region.last_writable_row() - self.region.first_writable_row()
        return max(1, min(self.page_size, capacity - TRAILER_ROWS))

    def build_tree(self, root: Path | None = None) -> list[str]:
        """Replace the buffered listing with the tree under ``root``."""
        if root is None:
            root, error = current_directory()
            if error is not None:
                raise FsOperationError(error)
        if not root.is_dir():
            raise FsOperationError(not_found(root))
        self.state = PageState(lines=build_tree_lines(root.resolve(), self.on_error))
        return self.state.lines

    def reset(self) -> None:
        self.state.last_shown = None

    def show_page(self) -> bool:
        """Write the next page plus its trailer; return whether more remain.

        The first trailer row stays blank unless the configured page size had
        to be shortened to fit the band, in which case it says so.
        """
        self.region.clear_and_home()
        page_size = self.effective_page_size()
        start = self.state.next_index()
        stop = min(start + page_size, len(self.state.lines))
        for index in range(start, stop):
            self.region.write_line(self.state.lines[index])
            self.state.last_shown = index
        if page_size < self.page_size:
            self.region.write_line(
                SHORTENED_PAGE_TEXT.format(lines=page_size, requested=self.page_size),
                style=self.hint_style,
            )
        else:
            self.region.write_line()
        if self.state.at_end():
            self.region.write_line(LAST_PAGE_TEXT, style=self.hint_style)
            return False
        self.region.write_line(NEXT_PAGE_TEXT, style=self.hint_style)
        self.region.write_line(STOP_PAGING_TEXT, style=self.hint_style)
        return True

    def page_through(self, read_key: Callable[[], str]) -> None:
        """Show pages while the user keeps pressing Space."""
        while self.show_page():
            if read_key() != CONTINUE_KEY:
                break

    def build_and_show(self, read_key: Callable[[], str], root: Path | None = None) -> None:
        self.build_tree(root)
        self.reset()
        self.page_through(read_key)
