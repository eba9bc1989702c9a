"""Persistent JSON settings.

Stores the last working directory, tree page size, theme and log level.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "panefm"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_PAGE_SIZE = 10


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> bool:
    """Persist config data as pretty-printed JSON, returning success."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError):
        return False
    return True


def _update(key: str, value: object) -> bool:
    config = load_config()
    config[key] = value
    return save_config(config)


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_last_directory() -> Path | None:
    """Return the directory saved on the previous exit, if it still exists."""
    value = _load_string("last_directory")
    if value is None:
        return None
    path = Path(value)
    return path if path.is_dir() else None


def save_last_directory(path: Path) -> bool:
    return _update("last_directory", str(path))


def load_page_size() -> int:
    """Return tree lines per page; unset, zero or invalid values mean 10."""
    value = load_config().get("page_size")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_PAGE_SIZE
    return value


def save_page_size(page_size: int) -> bool:
    if page_size <= 0:
        return False
    return _update("page_size", int(page_size))


def load_theme_name() -> str | None:
    return _load_string("theme")


def save_theme_name(theme_name: str) -> bool:
    stripped = str(theme_name).strip()
    if not stripped:
        return False
    return _update("theme", stripped)


def load_log_level() -> str | None:
    value = _load_string("log_level")
    return value.upper() if value is not None else None
