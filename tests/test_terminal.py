"""Tests for terminal mode control sequences and window maximizing."""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from panefm.terminal import MAXIMIZE_WINDOW_SEQUENCE, TerminalController


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("panefm.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "panefm.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("panefm.terminal.os.write") as write_mock, mock.patch(
            "panefm.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[2J\x1b[H\x1b[?25h"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[0m\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("panefm.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_write_encodes_text(self) -> None:
        with mock.patch("panefm.terminal.termios.tcgetattr", return_value=[0]), mock.patch(
            "panefm.terminal.os.write"
        ) as write_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.write("é")

        write_mock.assert_called_once_with(1, "é".encode("utf-8"))

    def test_maximize_window_is_best_effort(self) -> None:
        with mock.patch("panefm.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch("panefm.terminal.os.write") as write_mock:
            self.assertTrue(controller.maximize_window())
        write_mock.assert_called_once_with(1, MAXIMIZE_WINDOW_SEQUENCE)

        with mock.patch("panefm.terminal.os.write", side_effect=OSError("closed")):
            self.assertFalse(controller.maximize_window())


if __name__ == "__main__":
    unittest.main()
