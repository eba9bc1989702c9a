"""UI theme definitions and selection helpers.

Themes only colour canvas chrome: borders, the header band, the prompt and
error lines. ``mono`` carries empty styles for ``--no-color`` sessions.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the canvas and command handlers."""

    name: str
    border: str
    header: str
    prompt: str
    error: str
    pager_hint: str


DEFAULT_THEME = UITheme(
    name="default",
    border="\033[2m",
    header="\033[1;38;5;81m",
    prompt="\033[38;5;229m",
    error="\033[38;5;203m",
    pager_hint="\033[2;38;5;250m",
)

MONO_THEME = UITheme(
    name="mono",
    border="",
    header="",
    prompt="",
    error="",
    pager_hint="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    MONO_THEME.name: MONO_THEME,
}


def available_theme_names() -> list[str]:
    """Return known theme names in a stable order."""
    return sorted(_THEMES)


def resolve_theme(name: str | None, no_color: bool = False) -> UITheme:
    """Pick a theme by name; unknown names fall back to the default palette."""
    if no_color:
        return MONO_THEME
    if name is None:
        return DEFAULT_THEME
    return _THEMES.get(name.strip().lower(), DEFAULT_THEME)
