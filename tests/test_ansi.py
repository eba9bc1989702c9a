"""Regression tests for ANSI width and clipping primitives.

These protect region rows from spilling past the right edge of the console.
"""

import unittest

from panefm import ansi as ansi_mod


class ClipAnsiLineTests(unittest.TestCase):
    def test_plain_text_is_clipped_to_width(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("abcdef", 3), "abc")
        self.assertEqual(ansi_mod.clip_ansi_line("ab", 5), "ab")

    def test_escapes_cost_no_width(self) -> None:
        styled = "\033[31mred\033[0m text"
        clipped = ansi_mod.clip_ansi_line(styled, 4)
        self.assertEqual(clipped, "\033[31mred\033[0m ")
        self.assertEqual(ansi_mod.strip_ansi(clipped), "red ")

    def test_tabs_expand_to_next_stop(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("a\tb", 20), "a" + " " * 7 + "b")

    def test_wide_characters_are_not_split(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("ab漢", 3), "ab")
        self.assertEqual(ansi_mod.char_display_width("漢", 0), 2)

    def test_non_positive_width_yields_empty(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("abc", 0), "")
        self.assertEqual(ansi_mod.clip_ansi_line("", 5), "")


if __name__ == "__main__":
    unittest.main()
