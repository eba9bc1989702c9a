"""Tests for filesystem wrappers and their explicit failure values."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from panefm import fs


class FsWrapperTests(unittest.TestCase):
    def test_current_directory_reports_deleted_directory(self) -> None:
        with mock.patch("panefm.fs.Path.cwd", side_effect=FileNotFoundError(2, "No such file or directory")):
            cwd, error = fs.current_directory()
        self.assertIsNone(cwd)
        self.assertIs(error.kind, fs.FailureKind.NOT_FOUND)

    def test_nearest_existing_directory_walks_up(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            self.assertEqual(fs.nearest_existing_directory(root / "gone" / "deeper"), root)
            self.assertEqual(fs.nearest_existing_directory(root), root)

    def test_listing_a_missing_directory_reports_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing"
            files, error = fs.list_files(missing)
        self.assertEqual(files, [])
        self.assertIs(error.kind, fs.FailureKind.NOT_FOUND)

    def test_list_files_and_subdirectories_split_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "sub").mkdir()
            (root / "a.txt").write_text("a", encoding="utf-8")
            files, _ = fs.list_files(root)
            dirs, _ = fs.list_subdirectories(root)
        self.assertEqual([path.name for path in files], ["a.txt"])
        self.assertEqual([path.name for path in dirs], ["sub"])

    def test_copy_file_refuses_existing_target_without_overwrite(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "a.txt"
            target = root / "b.txt"
            source.write_text("new", encoding="utf-8")
            target.write_text("old", encoding="utf-8")

            error = fs.copy_file(source, target, overwrite=False)
            self.assertIs(error.kind, fs.FailureKind.ALREADY_EXISTS)
            self.assertEqual(target.read_text(encoding="utf-8"), "old")

            self.assertIsNone(fs.copy_file(source, target, overwrite=True))
            self.assertEqual(target.read_text(encoding="utf-8"), "new")

    def test_change_directory_rejects_files_and_missing_paths(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            file_path = root / "f.txt"
            file_path.write_text("x", encoding="utf-8")
            self.assertIs(fs.change_directory(root / "nope").kind, fs.FailureKind.NOT_FOUND)
            self.assertIs(fs.change_directory(file_path).kind, fs.FailureKind.IO_FAILURE)

    def test_directory_size_sums_nested_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "sub").mkdir()
            (root / "a.bin").write_bytes(b"12345")
            (root / "sub" / "b.bin").write_bytes(b"123")
            errors: list[fs.FsError] = []
            self.assertEqual(fs.directory_size(root, errors.append), 8)
        self.assertEqual(errors, [])

    def test_path_times_for_missing_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            times, error = fs.path_times(Path(tmp) / "gone")
        self.assertIsNone(times)
        self.assertIs(error.kind, fs.FailureKind.NOT_FOUND)


class CopyTreeTests(unittest.TestCase):
    def test_copies_nested_tree_and_asks_per_conflict(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "src"
            (source / "inner").mkdir(parents=True)
            (source / "a.txt").write_text("a", encoding="utf-8")
            (source / "b.txt").write_text("b", encoding="utf-8")
            (source / "inner" / "c.txt").write_text("c", encoding="utf-8")
            target = root / "dst"
            target.mkdir()
            (target / "a.txt").write_text("old a", encoding="utf-8")
            (target / "b.txt").write_text("old b", encoding="utf-8")
            asked: list[str] = []
            copied: list[str] = []

            def confirm(path: Path) -> bool:
                asked.append(path.name)
                return path.name == "a.txt"

            fs.copy_tree(
                source,
                target,
                confirm_overwrite=confirm,
                on_copied=lambda src, dst: copied.append(dst.name),
                on_error=lambda error: self.fail(str(error)),
            )

            self.assertEqual(sorted(asked), ["a.txt", "b.txt"])
            self.assertEqual(sorted(copied), ["a.txt", "c.txt"])
            self.assertEqual((target / "a.txt").read_text(encoding="utf-8"), "a")
            self.assertEqual((target / "b.txt").read_text(encoding="utf-8"), "old b")
            self.assertEqual((target / "inner" / "c.txt").read_text(encoding="utf-8"), "c")


class DeleteTreeTests(unittest.TestCase):
    def test_removes_file_empty_subdirectory_and_parent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "victim"
            (target / "empty").mkdir(parents=True)
            (target / "file.txt").write_text("x", encoding="utf-8")
            removed: list[Path] = []

            result = fs.delete_tree(target, on_removed=removed.append, on_error=lambda error: self.fail(str(error)))

            self.assertTrue(result)
            self.assertFalse(target.exists())
            self.assertEqual(removed, [target / "empty", target])

    def test_parent_survives_file_added_during_recursion(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "victim"
            (target / "empty").mkdir(parents=True)
            (target / "file.txt").write_text("x", encoding="utf-8")
            real_delete_directory = fs.delete_directory

            def delete_then_race(path: Path):
                error = real_delete_directory(path)
                if path.name == "empty":
                    (target / "late.txt").write_text("late", encoding="utf-8")
                return error

            with mock.patch("panefm.fs.delete_directory", side_effect=delete_then_race):
                result = fs.delete_tree(target, on_removed=lambda path: None, on_error=lambda error: None)

            self.assertFalse(result)
            self.assertTrue(target.exists())
            self.assertEqual([path.name for path in target.iterdir()], ["late.txt"])

    def test_failed_file_delete_is_reported_and_walk_continues(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "victim"
            (target / "sub").mkdir(parents=True)
            (target / "stuck.txt").write_text("x", encoding="utf-8")
            errors: list[fs.FsError] = []
            stuck_error = fs.FsError(fs.FailureKind.IO_FAILURE, target / "stuck.txt", "Permission denied")

            with mock.patch("panefm.fs.delete_file", return_value=stuck_error):
                result = fs.delete_tree(target, on_removed=lambda path: None, on_error=errors.append)

            self.assertFalse(result)
            self.assertEqual(errors, [stuck_error])
            self.assertFalse((target / "sub").exists())


if __name__ == "__main__":
    unittest.main()
