"""Session wiring: canvas, paginator, handlers and dispatcher on one console."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from . import config
from .canvas import Canvas
from .commands import CommandKind, CommandRegistry, default_registry
from .console import Console
from .dispatcher import Dispatcher
from .handlers import CommandHandlers
from .input import LineEditor, read_key
from .terminal import TerminalController
from .theme import DEFAULT_THEME, UITheme
from .tree import Paginator

logger = logging.getLogger(__name__)

PROMPT_MARKER = ">"


@dataclass
class Session:
    """Everything one interactive run needs, wired together."""

    console: Console
    canvas: Canvas
    registry: CommandRegistry
    paginator: Paginator
    handlers: CommandHandlers
    dispatcher: Dispatcher
    line_editor: LineEditor

    def prompt(self) -> None:
        """Show ``<cwd>>`` in the input band and leave the cursor after it."""
        self.canvas.input.write(f"{self.handlers.working_directory()}{PROMPT_MARKER}", style=self.canvas.theme.prompt)

    def run(self) -> None:
        self.canvas.draw_all()
        self.dispatcher.run(self.prompt, self.line_editor.read_line)


def build_session(
    console: Console,
    read_key: Callable[[], str],
    *,
    page_size: int = config.DEFAULT_PAGE_SIZE,
    theme: UITheme = DEFAULT_THEME,
    registry: CommandRegistry | None = None,
    save_last_directory: Callable[[Path], bool] = config.save_last_directory,
) -> Session:
    registry = registry if registry is not None else default_registry()
    help_alias = registry.for_kind(CommandKind.HELP).alias
    canvas = Canvas(console, header_text=f"Type {help_alias} for the list of commands", theme=theme)
    paginator = Paginator(
        canvas.tree,
        on_error=lambda error: canvas.info.write_line(f"Error: {error}", style=theme.error),
        page_size=page_size,
        hint_style=theme.pager_hint,
    )
    handlers = CommandHandlers(canvas, paginator, registry, read_key, save_last_directory)
    dispatcher = Dispatcher(registry, handlers.table(), canvas.report_error)
    return Session(
        console=console,
        canvas=canvas,
        registry=registry,
        paginator=paginator,
        handlers=handlers,
        dispatcher=dispatcher,
        line_editor=LineEditor(console, read_key),
    )


def run_manager(
    *,
    page_size: int,
    theme: UITheme,
    maximize: bool = True,
    stdin_fd: int = 0,
    stdout_fd: int = 1,
) -> None:
    """Run the interactive file manager on the controlling terminal."""
    controller = TerminalController(stdin_fd, stdout_fd)
    with controller.raw_mode():
        if maximize and not controller.maximize_window():
            logger.info("terminal window could not be maximized")
        size = shutil.get_terminal_size((80, 24))
        console = Console(size.columns, size.lines, emit=controller.write)
        session = build_session(
            console,
            lambda: read_key(stdin_fd),
            page_size=page_size,
            theme=theme,
        )
        logger.info("session started in %s (%dx%d)", session.handlers.last_directory, size.columns, size.lines)
        session.run()
    logger.info("session ended")
