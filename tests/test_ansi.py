"""Regression tests for ANSI width and clipping primitives.

These cases protect pane layout math from styled or wide-character text.
"""

import unittest

from flakeviewer import ansi as ansi_mod


class DisplayWidthTests(unittest.TestCase):
    def test_escape_sequences_have_no_width(self) -> None:
        self.assertEqual(ansi_mod.display_width("\x1b[32mabc\x1b[0m"), 3)

    def test_wide_characters_count_double(self) -> None:
        self.assertEqual(ansi_mod.display_width("日本"), 4)

    def test_tabs_expand_to_next_stop(self) -> None:
        self.assertEqual(ansi_mod.display_width("ab\tc"), 9)


class ClipTests(unittest.TestCase):
    def test_clip_keeps_escape_sequences(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("\x1b[1mabcdef", 3), "\x1b[1mabc")

    def test_clip_does_not_split_wide_character(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("a日b", 2), "a")

    def test_clip_to_zero_is_empty(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("abc", 0), "")

    def test_fit_pads_plain_text(self) -> None:
        self.assertEqual(ansi_mod.fit_ansi_line("ab", 5), "ab   ")

    def test_fit_resets_styled_text_before_padding(self) -> None:
        self.assertEqual(ansi_mod.fit_ansi_line("\x1b[31mab", 4), "\x1b[31mab\x1b[0m  ")


if __name__ == "__main__":
    unittest.main()
