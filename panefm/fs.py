"""Filesystem wrappers with explicit failure values.

Every operation that can fail returns an ``FsError`` (or a ``(value, error)``
pair) instead of raising, so callers decide whether a failure aborts the
command or is reported and skipped. Recursive copy and delete report
failures per entry and keep going with the siblings.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class FailureKind(Enum):
    NOT_FOUND = "not found"
    ALREADY_EXISTS = "already exists"
    IO_FAILURE = "i/o failure"


@dataclass(frozen=True)
class FsError:
    """One failed filesystem call."""

    kind: FailureKind
    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.path}"


class FsOperationError(Exception):
    """Raised by command code that cannot continue after an ``FsError``."""

    def __init__(self, error: FsError) -> None:
        super().__init__(str(error))
        self.error = error


@dataclass(frozen=True)
class PathTimes:
    created: datetime
    modified: datetime


def _error_from_os(exc: OSError, path: Path) -> FsError:
    if isinstance(exc, FileNotFoundError):
        kind = FailureKind.NOT_FOUND
    elif isinstance(exc, FileExistsError):
        kind = FailureKind.ALREADY_EXISTS
    else:
        kind = FailureKind.IO_FAILURE
    message = exc.strerror or str(exc) or kind.value
    return FsError(kind, path, message)


def not_found(path: Path) -> FsError:
    return FsError(FailureKind.NOT_FOUND, path, "No such file or directory")


def path_exists(path: Path) -> bool:
    return path.exists()


def is_directory(path: Path) -> bool:
    return path.is_dir()


def _scan(directory: Path, want_dirs: bool) -> tuple[list[Path], FsError | None]:
    found: list[Path] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    entry_is_dir = entry.is_dir(follow_symlinks=False)
                except OSError:
                    entry_is_dir = False
                if entry_is_dir == want_dirs:
                    found.append(Path(entry.path))
    except OSError as exc:
        return [], _error_from_os(exc, directory)
    return found, None


def list_files(directory: Path) -> tuple[list[Path], FsError | None]:
    """Return non-directory children of ``directory`` in scan order."""
    return _scan(directory, want_dirs=False)


def list_subdirectories(directory: Path) -> tuple[list[Path], FsError | None]:
    """Return child directories in scan order; symlinked directories are skipped."""
    return _scan(directory, want_dirs=True)


def file_size(path: Path) -> tuple[int | None, FsError | None]:
    try:
        return int(path.stat().st_size), None
    except OSError as exc:
        return None, _error_from_os(exc, path)


def directory_size(path: Path, on_error: Callable[[FsError], None]) -> int:
    """Sum file sizes below ``path``; unreadable subtrees count as zero."""
    total = 0
    files, error = list_files(path)
    if error is not None:
        on_error(error)
        return 0
    for child in files:
        size, size_error = file_size(child)
        if size_error is not None:
            on_error(size_error)
            continue
        total += size or 0
    subdirectories, error = list_subdirectories(path)
    if error is not None:
        on_error(error)
        return total
    for child in subdirectories:
        total += directory_size(child, on_error)
    return total


def path_times(path: Path) -> tuple[PathTimes | None, FsError | None]:
    """Return creation and last-write times.

    Platforms without a birth time report the inode change time instead.
    """
    try:
        stat = path.stat()
    except OSError as exc:
        return None, _error_from_os(exc, path)
    created = getattr(stat, "st_birthtime", None)
    if created is None:
        created = stat.st_ctime
    return PathTimes(
        created=datetime.fromtimestamp(created),
        modified=datetime.fromtimestamp(stat.st_mtime),
    ), None


def copy_file(source: Path, target: Path, overwrite: bool) -> FsError | None:
    if target.exists() and not overwrite:
        return FsError(FailureKind.ALREADY_EXISTS, target, "Target already exists")
    try:
        shutil.copy2(source, target)
    except OSError as exc:
        return _error_from_os(exc, source)
    return None


def delete_file(path: Path) -> FsError | None:
    try:
        path.unlink()
    except OSError as exc:
        return _error_from_os(exc, path)
    return None


def create_directory(path: Path) -> FsError | None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return _error_from_os(exc, path)
    return None


def delete_directory(path: Path) -> FsError | None:
    """Remove ``path`` only if it is empty."""
    try:
        path.rmdir()
    except OSError as exc:
        return _error_from_os(exc, path)
    return None


def current_directory() -> tuple[Path | None, FsError | None]:
    """Return the working directory, or an error once it has been deleted."""
    try:
        return Path.cwd(), None
    except OSError as exc:
        return None, _error_from_os(exc, Path(os.curdir))


def nearest_existing_directory(path: Path) -> Path:
    """Return ``path`` or its closest ancestor that is still a directory."""
    for candidate in (path, *path.parents):
        if candidate.is_dir():
            return candidate
    return Path(path.anchor or os.sep)


def change_directory(path: Path) -> FsError | None:
    if not path.exists():
        return not_found(path)
    if not path.is_dir():
        return FsError(FailureKind.IO_FAILURE, path, "Not a directory")
    try:
        os.chdir(path)
    except OSError as exc:
        return _error_from_os(exc, path)
    return None


def copy_tree(
    source: Path,
    target: Path,
    *,
    confirm_overwrite: Callable[[Path], bool],
    on_copied: Callable[[Path, Path], None],
    on_error: Callable[[FsError], None],
) -> None:
    """Copy directory ``source`` into ``target`` recursively.

    Each existing target file is confirmed on its own through
    ``confirm_overwrite``; a declined file is skipped.
    """
    error = create_directory(target)
    if error is not None:
        on_error(error)
        return

    files, error = list_files(source)
    if error is not None:
        on_error(error)
    for child in files:
        destination = target / child.name
        overwrite = False
        if destination.exists():
            overwrite = confirm_overwrite(destination)
            if not overwrite:
                continue
        copy_error = copy_file(child, destination, overwrite)
        if copy_error is not None:
            logger.warning("copy failed: %s", copy_error)
            on_error(copy_error)
            continue
        on_copied(child, destination)

    subdirectories, error = list_subdirectories(source)
    if error is not None:
        on_error(error)
        return
    for child in subdirectories:
        copy_tree(
            child,
            target / child.name,
            confirm_overwrite=confirm_overwrite,
            on_copied=on_copied,
            on_error=on_error,
        )


def delete_tree(
    path: Path,
    *,
    on_removed: Callable[[Path], None],
    on_error: Callable[[FsError], None],
) -> bool:
    """Delete directory ``path`` with everything below it.

    Files go first, then subdirectories recursively. The directory itself is
    removed only if it is empty afterwards; anything created meanwhile keeps
    it in place. Returns whether ``path`` was removed.
    """
    files, error = list_files(path)
    if error is not None:
        on_error(error)
        return False
    for child in files:
        delete_error = delete_file(child)
        if delete_error is not None:
            logger.warning("delete failed: %s", delete_error)
            on_error(delete_error)

    subdirectories, error = list_subdirectories(path)
    if error is not None:
        on_error(error)
        return False
    for child in subdirectories:
        delete_tree(child, on_removed=on_removed, on_error=on_error)

    remaining_files, _ = list_files(path)
    remaining_dirs, _ = list_subdirectories(path)
    if remaining_files or remaining_dirs:
        return False
    error = delete_directory(path)
    if error is not None:
        on_error(error)
        return False
    on_removed(path)
    return True
