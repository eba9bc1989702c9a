"""Command-line splitting and positional argument binding.

Arguments may be typed bare (``cop a.txt b.txt``) or in double quotes when
they contain spaces (``cop "C:\\a b" "D:\\c"``). Whitespace outside quotes
separates arguments; when the quotes do not balance, only the ``" "``
sequence between two quoted arguments does.
"""

from __future__ import annotations

import shlex
from dataclasses import fields

QUOTE = '"'
QUOTED_GAP = '" "'
SEPARATOR = "\x00"


class CommandArgumentError(ValueError):
    """Arguments that do not fit the command they were given to."""


def split_command(line: str) -> tuple[str, str | None] | None:
    """Split ``line`` into ``(alias, remainder)``.

    Returns ``None`` for blank input. ``remainder`` is ``None`` when only the
    alias was typed.
    """
    parts = line.strip().split(None, 1)
    if not parts:
        return None
    if len(parts) == 1:
        return parts[0], None
    remainder = parts[1].strip()
    return parts[0], remainder or None


def _split_quoted(text: str) -> list[str] | None:
    """Split on whitespace outside quotes; ``None`` when quotes are unbalanced."""
    lexer = shlex.shlex(text, posix=False)
    lexer.whitespace_split = True
    lexer.commenters = ""
    try:
        return list(lexer)
    except ValueError:
        return None


def split_arguments(remainder: str) -> list[str]:
    """Turn the text after the alias into positional argument strings.

    * with balanced quotes, quoted text is kept together and whitespace
      outside quotes separates arguments;
    * with unbalanced quotes, ``" "`` still separates arguments and anything
      else stays one argument;
    * unquoted text splits on spaces.

    Quote characters never survive into the result.
    """
    if QUOTE not in remainder:
        parts = [token for token in remainder.split(" ") if token]
    else:
        parts = _split_quoted(remainder)
        if parts is None:
            parts = remainder.replace(QUOTED_GAP, SEPARATOR).split(SEPARATOR)
    return [part.replace(QUOTE, "").strip() for part in parts]


def bind_arguments(arguments_type: type, values: list[str]) -> object:
    """Build ``arguments_type`` from positional ``values``.

    Missing trailing fields keep their dataclass defaults; surplus values are
    an error.
    """
    declared = fields(arguments_type)
    if len(values) > len(declared):
        raise CommandArgumentError(
            f"expected at most {len(declared)} argument(s), got {len(values)}"
        )
    return arguments_type(**{field.name: value for field, value in zip(declared, values)})


def require(value: str | None, name: str) -> str:
    """Return ``value`` or raise when a required argument was left out."""
    if value is None or not value.strip():
        raise CommandArgumentError(f"missing required argument: {name}")
    return value
