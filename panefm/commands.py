"""Static command table.

Each command pairs a user-facing alias with a ``CommandKind`` that selects
its handler and a frozen dataclass describing its positional arguments.
Field order is argument order; field defaults fill omitted trailing
arguments.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, fields
from enum import Enum


class CommandKind(Enum):
    CHANGE_DIR = "change_dir"
    LIST = "list"
    COPY = "copy"
    REMOVE = "remove"
    INFO = "info"
    HELP = "help"
    CLEAR = "clear"
    EXIT = "exit"


@dataclass(frozen=True)
class NoArgs:
    pass


@dataclass(frozen=True)
class PathArgs:
    path: str | None = None


@dataclass(frozen=True)
class CopyArgs:
    source: str | None = None
    destination: str | None = None


@dataclass(frozen=True)
class Command:
    """One user command: alias, help text, handler kind and argument struct."""

    alias: str
    description: str
    kind: CommandKind
    arguments: type = NoArgs

    def parameter_names(self) -> tuple[str, ...]:
        return tuple(field.name for field in fields(self.arguments))

    def takes_arguments(self) -> bool:
        return bool(fields(self.arguments))


class CommandRegistry:
    """Ordered, immutable set of commands with case-insensitive lookup."""

    def __init__(self, commands: Iterable[Command]) -> None:
        self._commands = tuple(commands)
        self._by_alias: dict[str, Command] = {}
        for command in self._commands:
            key = command.alias.casefold()
            if key in self._by_alias:
                raise ValueError(f"duplicate command alias: {command.alias!r}")
            self._by_alias[key] = command
        self._aliases = frozenset(self._by_alias)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    @property
    def commands(self) -> tuple[Command, ...]:
        return self._commands

    @property
    def aliases(self) -> frozenset[str]:
        """Casefolded aliases for membership tests."""
        return self._aliases

    def is_alias(self, token: str) -> bool:
        return token.casefold() in self._aliases

    def resolve(self, token: str) -> Command | None:
        return self._by_alias.get(token.casefold())

    def for_kind(self, kind: CommandKind) -> Command:
        for command in self._commands:
            if command.kind is kind:
                return command
        raise KeyError(kind)


# Aliases deliberately differ from common shell commands.
DEFAULT_COMMANDS: tuple[Command, ...] = (
    Command("cdc", "(directory) - Change the working directory. Required.", CommandKind.CHANGE_DIR, PathArgs),
    Command(
        "lst",
        "[directory] - Show the directory tree, page by page. Defaults to the working directory.",
        CommandKind.LIST,
        PathArgs,
    ),
    Command(
        "cop",
        "(source) (destination) - Copy a file or a directory recursively. Both required.",
        CommandKind.COPY,
        CopyArgs,
    ),
    Command("rmc", "(file or directory) - Delete a file or a directory recursively. Required.", CommandKind.REMOVE, PathArgs),
    Command("info", "(file or directory) - Show size, timestamps and type. Required.", CommandKind.INFO, PathArgs),
    Command("help", "Show this help.", CommandKind.HELP),
    Command("clc", "Clear and redraw every screen area.", CommandKind.CLEAR),
    Command("exit", "Remember the working directory and quit.", CommandKind.EXIT),
)


def default_registry() -> CommandRegistry:
    return CommandRegistry(DEFAULT_COMMANDS)
