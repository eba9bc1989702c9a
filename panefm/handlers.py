"""Command handlers: the work behind each ``CommandKind``.

Handlers print through the canvas regions and raise on failures that end
the command; the dispatcher turns those into ``Error:`` lines. Failures on
single entries inside a recursive copy or delete are reported as they
happen and the walk continues.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from . import fs
from .arguments import CommandArgumentError, require
from .canvas import Canvas
from .commands import CommandKind, CommandRegistry, CopyArgs, NoArgs, PathArgs
from .filetype import describe_file_type
from .tree import Paginator

logger = logging.getLogger(__name__)

INFO_COLUMN_WIDTH = 25
INFO_RULE = "*" * 80
INFO_HEADER = "".join(
    title.center(INFO_COLUMN_WIDTH) + "|" for title in ("Size, bytes", "Created", "Last written")
)
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
HELP_HINT = "** Quote file and directory names that contain spaces. **"


def _as_path(value: str) -> Path:
    return Path(value).expanduser()


def _info_cell(value: object) -> str:
    return str(value).ljust(INFO_COLUMN_WIDTH) + "|"


def _is_within(candidate: Path, ancestor: Path) -> bool:
    try:
        return candidate.resolve().is_relative_to(ancestor.resolve())
    except OSError:
        return False


class CommandHandlers:
    """Handlers bound to one canvas, paginator and key source."""

    def __init__(
        self,
        canvas: Canvas,
        paginator: Paginator,
        registry: CommandRegistry,
        read_key: Callable[[], str],
        save_last_directory: Callable[[Path], bool],
    ) -> None:
        self.canvas = canvas
        self.paginator = paginator
        self.registry = registry
        self.read_key = read_key
        self.save_last_directory = save_last_directory
        cwd, _ = fs.current_directory()
        self.last_directory = cwd if cwd is not None else Path.home()

    def working_directory(self) -> Path:
        """Return the working directory, moving out of it if it was deleted.

        The nearest surviving ancestor of the last known directory becomes the
        new working directory and the move is reported in the info band.
        """
        cwd, error = fs.current_directory()
        if cwd is not None:
            self.last_directory = cwd
            return cwd
        logger.warning("working directory is gone: %s", error)
        fallback = fs.nearest_existing_directory(self.last_directory)
        change_error = fs.change_directory(fallback)
        if change_error is not None:
            logger.warning("could not leave deleted directory: %s", change_error)
        self.canvas.info.write_line(
            f"{self.last_directory} no longer exists; working directory is now {fallback}."
        )
        self.last_directory = fallback
        return fallback

    def table(self) -> dict[CommandKind, Callable[[object], bool | None]]:
        return {
            CommandKind.CHANGE_DIR: self.change_dir,
            CommandKind.LIST: self.list_tree,
            CommandKind.COPY: self.copy,
            CommandKind.REMOVE: self.remove,
            CommandKind.INFO: self.info,
            CommandKind.HELP: self.help,
            CommandKind.CLEAR: self.clear,
            CommandKind.EXIT: self.exit,
        }

    def report(self, error: fs.FsError) -> None:
        self.canvas.info.write_line(f"Error: {error}", style=self.canvas.theme.error)

    def change_dir(self, args: PathArgs) -> None:
        target = _as_path(require(args.path, "directory"))
        error = fs.change_directory(target)
        if error is not None:
            raise fs.FsOperationError(error)
        logger.info("working directory is now %s", self.working_directory())

    def list_tree(self, args: PathArgs) -> None:
        root = _as_path(args.path) if args.path else None
        self.paginator.build_and_show(self.read_key, root)

    def _confirm_overwrite(self, target: Path) -> bool:
        self.canvas.input.write_line(
            f"{target} already exists. Press 'y' to replace it, any other key to skip."
        )
        return self.read_key() in {"y", "Y"}

    def copy(self, args: CopyArgs) -> None:
        source = _as_path(require(args.source, "source"))
        target = _as_path(require(args.destination, "destination"))
        self.canvas.info.clear_and_home()

        if fs.is_directory(source):
            if _is_within(target, source):
                raise CommandArgumentError(f"cannot copy {source} into itself")
            fs.copy_tree(
                source,
                target,
                confirm_overwrite=self._confirm_overwrite,
                on_copied=lambda src, dst: self.canvas.info.write_line(f"{src} => {dst}"),
                on_error=self.report,
            )
            return
        if not fs.path_exists(source):
            raise fs.FsOperationError(fs.not_found(source))

        if fs.is_directory(target):
            target = target / source.name
        overwrite = False
        if fs.path_exists(target):
            overwrite = self._confirm_overwrite(target)
            if not overwrite:
                self.canvas.input.write_line("Skipped.")
                return
        error = fs.copy_file(source, target, overwrite)
        if error is not None:
            raise fs.FsOperationError(error)
        self.canvas.input.write_line("Done.")

    def remove(self, args: PathArgs) -> None:
        target = _as_path(require(args.path, "path"))
        self.canvas.info.clear_and_home()

        if fs.is_directory(target) and not target.is_symlink():
            removed = fs.delete_tree(
                target,
                on_removed=lambda path: self.canvas.info.write_line(f"{path} => removed."),
                on_error=self.report,
            )
            if not removed:
                self.canvas.info.write_line(f"{target} was kept: it is not empty.")
            return
        if not fs.path_exists(target) and not target.is_symlink():
            raise fs.FsOperationError(fs.not_found(target))
        error = fs.delete_file(target)
        if error is not None:
            raise fs.FsOperationError(error)
        self.canvas.info.write_line("Done.")

    def info(self, args: PathArgs) -> None:
        target = _as_path(require(args.path, "path"))
        if not fs.path_exists(target):
            raise fs.FsOperationError(fs.not_found(target))

        times, error = fs.path_times(target)
        if error is not None:
            raise fs.FsOperationError(error)
        failures: list[fs.FsError] = []
        if fs.is_directory(target):
            size = fs.directory_size(target, failures.append)
            title = f"Directory {target.resolve()}:"
        else:
            size, error = fs.file_size(target)
            if error is not None:
                raise fs.FsOperationError(error)
            title = f"File {target.resolve()}:"

        region = self.canvas.info
        region.clear_and_home()
        region.write_line(f"{title} ({describe_file_type(target)})")
        region.write_line(INFO_HEADER)
        region.write_line(INFO_RULE)
        region.write_line(
            _info_cell(size)
            + _info_cell(times.created.strftime(TIMESTAMP_FORMAT))
            + _info_cell(times.modified.strftime(TIMESTAMP_FORMAT))
        )
        # Unreadable subtrees are left out of the size.
        for failure in failures:
            self.report(failure)

    def help(self, _args: NoArgs) -> None:
        region = self.canvas.tree
        region.clear_and_home()
        region.write_line(HELP_HINT)
        for number, command in enumerate(self.registry, start=1):
            region.write_line(f"{number}. {command.alias} {command.description}")

    def clear(self, _args: NoArgs) -> None:
        self.canvas.clear_all()

    def exit(self, _args: NoArgs) -> bool:
        cwd = self.working_directory()
        if not self.save_last_directory(cwd):
            logger.warning("could not save last directory %s", cwd)
        return False
