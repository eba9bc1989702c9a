"""File logging for interactive sessions.

The terminal belongs to the canvas, so log records go to a rotating file in
the per-user log directory and never to stdout or stderr.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = "panefm.log"
LOG_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)s - %(message)s"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def setup_logging(level: str | None = None, log_path: Path | None = None) -> logging.Logger:
    """Attach a rotating file handler to the ``panefm`` logger.

    Unknown level names fall back to ``WARNING``. When the log file cannot be
    opened, records are dropped through a ``NullHandler``.
    """
    package_logger = logging.getLogger(APP_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    resolved_level = logging.getLevelName((level or "WARNING").upper())
    if not isinstance(resolved_level, int):
        resolved_level = logging.WARNING
    package_logger.setLevel(resolved_level)
    package_logger.propagate = False

    target = log_path if log_path is not None else default_log_path()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            target, maxBytes=1024 * 1024, backupCount=3, encoding="utf-8"
        )
    except OSError:
        package_logger.addHandler(logging.NullHandler())
        return package_logger
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.debug("logging to %s at %s", target, logging.getLevelName(resolved_level))
    return package_logger
