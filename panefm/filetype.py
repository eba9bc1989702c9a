"""File-type labels for the info command, derived from Pygments lexers."""

from __future__ import annotations

from pathlib import Path

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

UNKNOWN_TYPE = "Unknown"
DIRECTORY_TYPE = "Directory"


def describe_file_type(path: Path) -> str:
    """Return the language name Pygments associates with ``path``'s name."""
    if path.is_dir():
        return DIRECTORY_TYPE
    try:
        lexer = get_lexer_for_filename(path.name)
    except ClassNotFound:
        return UNKNOWN_TYPE
    return lexer.name
