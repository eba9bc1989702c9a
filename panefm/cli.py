"""Command-line front door for panefm.

Parses startup options, restores the last working directory and hands the
terminal to the interactive session.
"""

from __future__ import annotations

import argparse
import termios
from pathlib import Path

from . import config, fs
from .app import run_manager
from .canvas import CanvasTooSmallError
from .logs import setup_logging
from .theme import available_theme_names, resolve_theme


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Terminal file manager with a paged directory tree and typed commands."
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Start directory. Defaults to the directory used when panefm last exited.",
    )
    parser.add_argument("--page-size", type=_positive_int, default=None, help="Tree lines per page (saved).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colors.")
    parser.add_argument("--no-maximize", action="store_true", help="Do not ask the terminal to maximize.")
    parser.add_argument("--log-level", default=None, help="Log level for the session log file.")
    return parser


def resolve_start_directory(path_arg: str | None) -> Path | None:
    """Pick the explicit path, else the saved last directory, else ``None``."""
    if path_arg is not None:
        path = Path(path_arg).expanduser()
        if not path.is_dir():
            raise SystemExit(f"Directory not found: {path}")
        return path
    return config.load_last_directory()


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and start an interactive session."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or config.load_log_level())

    start = resolve_start_directory(args.path)
    if start is not None:
        error = fs.change_directory(start)
        if error is not None:
            raise SystemExit(str(error))

    if args.page_size is not None:
        config.save_page_size(args.page_size)
    if args.theme is not None:
        config.save_theme_name(args.theme)

    theme = resolve_theme(args.theme or config.load_theme_name(), no_color=args.no_color)
    try:
        run_manager(
            page_size=args.page_size or config.load_page_size(),
            theme=theme,
            maximize=not args.no_maximize,
        )
    except termios.error as exc:
        raise SystemExit("panefm needs an interactive terminal") from exc
    except CanvasTooSmallError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
