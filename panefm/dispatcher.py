"""Read-parse-dispatch loop for typed commands.

The dispatcher is either awaiting input or dispatching one line. Whatever a
handler raises is reported on the canvas and the loop goes back to the
prompt; only the exit command (or end of input) leaves the loop.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum

from .arguments import bind_arguments, split_arguments, split_command
from .commands import Command, CommandKind, CommandRegistry

logger = logging.getLogger(__name__)

Handler = Callable[[object], bool | None]


class DispatcherState(Enum):
    AWAITING_INPUT = "awaiting_input"
    DISPATCHING = "dispatching"


class DispatchError(RuntimeError):
    """A recognised command that could not be routed to a handler."""


@dataclass(frozen=True)
class ParsedCommand:
    command: Command
    arguments: object


class Dispatcher:
    """Route input lines to handlers selected by ``CommandKind``.

    Handlers receive the command's argument struct and return ``False`` to
    end the session; any other result keeps the loop running.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        handlers: Mapping[CommandKind, Handler],
        report_error: Callable[[BaseException], None],
    ) -> None:
        self.registry = registry
        self.handlers = dict(handlers)
        self.report_error = report_error
        self.state = DispatcherState.AWAITING_INPUT

    def parse(self, line: str) -> ParsedCommand | None:
        """Resolve ``line`` to a command and its bound arguments.

        Blank lines and unknown aliases give ``None``. Commands without
        arguments ignore any text after the alias.
        """
        split = split_command(line)
        if split is None:
            return None
        alias, remainder = split
        command = self.registry.resolve(alias)
        if command is None:
            logger.debug("ignoring unrecognized input %r", alias)
            return None
        if not command.takes_arguments() or remainder is None:
            return ParsedCommand(command, command.arguments())
        values = split_arguments(remainder)
        return ParsedCommand(command, bind_arguments(command.arguments, values))

    def dispatch(self, line: str) -> bool:
        """Run one input line; return whether the session should continue."""
        self.state = DispatcherState.DISPATCHING
        try:
            parsed = self.parse(line)
            if parsed is None:
                return True
            handler = self.handlers.get(parsed.command.kind)
            if handler is None:
                raise DispatchError(f"no handler registered for {parsed.command.alias!r}")
            logger.info("dispatching %s %r", parsed.command.alias, parsed.arguments)
            return handler(parsed.arguments) is not False
        except Exception as exc:
            logger.warning("command failed: %r", line, exc_info=True)
            self.report_error(exc)
            return True
        finally:
            self.state = DispatcherState.AWAITING_INPUT

    def run(self, prompt: Callable[[], None], read_line: Callable[[], str | None]) -> None:
        """Prompt, read and dispatch until a handler ends the session.

        End of input behaves like the exit command.
        """
        while True:
            prompt()
            line = read_line()
            if line is None:
                line = self.registry.for_kind(CommandKind.EXIT).alias
            if not self.dispatch(line):
                return
