"""Tests for command-line startup."""

from __future__ import annotations

import os
import tempfile
import termios
import unittest
from pathlib import Path
from unittest import mock

from panefm import cli
from panefm.canvas import CanvasTooSmallError
from panefm.theme import MONO_THEME


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._cwd = os.getcwd()
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        self.addCleanup(self._tmp.cleanup)
        self.addCleanup(os.chdir, self._cwd)

        self.config_mock = mock.patch.object(cli, "config").start()
        self.config_mock.load_last_directory.return_value = None
        self.config_mock.load_log_level.return_value = None
        self.config_mock.load_theme_name.return_value = None
        self.config_mock.load_page_size.return_value = 10
        self.run_mock = mock.patch.object(cli, "run_manager").start()
        self.logging_mock = mock.patch.object(cli, "setup_logging").start()
        self.addCleanup(mock.patch.stopall)

    def test_explicit_path_becomes_working_directory(self) -> None:
        cli.main([str(self.root)])

        self.assertEqual(Path.cwd().resolve(), self.root)
        self.run_mock.assert_called_once()
        self.assertEqual(self.run_mock.call_args.kwargs["page_size"], 10)
        self.assertTrue(self.run_mock.call_args.kwargs["maximize"])

    def test_saved_directory_is_restored_without_path(self) -> None:
        self.config_mock.load_last_directory.return_value = self.root
        cli.main([])
        self.assertEqual(Path.cwd().resolve(), self.root)

    def test_options_are_saved_and_forwarded(self) -> None:
        cli.main([str(self.root), "--page-size", "4", "--theme", "mono", "--no-maximize", "--log-level", "debug"])

        self.config_mock.save_page_size.assert_called_once_with(4)
        self.config_mock.save_theme_name.assert_called_once_with("mono")
        self.logging_mock.assert_called_once_with("debug")
        kwargs = self.run_mock.call_args.kwargs
        self.assertEqual(kwargs["page_size"], 4)
        self.assertEqual(kwargs["theme"], MONO_THEME)
        self.assertFalse(kwargs["maximize"])

    def test_missing_path_exits(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            cli.main([str(self.root / "absent")])
        self.assertIn("Directory not found", str(ctx.exception.code))
        self.run_mock.assert_not_called()

    def test_invalid_page_size_is_rejected_by_parser(self) -> None:
        with mock.patch("sys.stderr"), self.assertRaises(SystemExit):
            cli.main(["--page-size", "0"])

    def test_terminal_failures_become_clean_exits(self) -> None:
        self.run_mock.side_effect = termios.error(25, "Inappropriate ioctl for device")
        with self.assertRaises(SystemExit) as ctx:
            cli.main([str(self.root)])
        self.assertEqual(ctx.exception.code, "panefm needs an interactive terminal")

        self.run_mock.side_effect = CanvasTooSmallError("terminal too small: 5 rows")
        with self.assertRaises(SystemExit) as ctx:
            cli.main([str(self.root)])
        self.assertEqual(ctx.exception.code, "terminal too small: 5 rows")


if __name__ == "__main__":
    unittest.main()
