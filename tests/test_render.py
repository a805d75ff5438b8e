"""Frame composition tests for the two-pane view.

Frames are built from plain render contexts so layout, titles, selection
styling, and preview variants can be asserted without a terminal.
"""

from __future__ import annotations

import re
import unittest
from unittest import mock

from flakeviewer.evaluator import Internal, Leaf, table_from_tree
from flakeviewer.navigator import Navigator
from flakeviewer.render import (
    RenderContext,
    build_frame,
    build_status_line,
    clamp_left_width,
    compute_left_width,
    context_for_navigator,
    list_rows_for,
    preview_display_lines,
    render_dual_pane,
)
from flakeviewer.ui_theme import DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME, resolve_theme

_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def _plain_rows(frame: str) -> list[str]:
    return [_ANSI_RE.sub("", row) for row in frame.split("\r\n")]


def _context(**overrides) -> RenderContext:
    values = dict(
        items=["packages", "devShells"],
        cursor=0,
        list_start=0,
        left_title=".",
        right_title="packages",
        preview_lines=["x86_64-linux"],
        status_text="flake#.packages",
        width=60,
        max_lines=6,
        left_width=24,
        theme=PLAIN_THEME,
        show_help=False,
    )
    values.update(overrides)
    return RenderContext(**values)


class FrameLayoutTests(unittest.TestCase):
    def test_frame_has_title_rows_list_rows_and_status(self) -> None:
        rows = _plain_rows(build_frame(_context()))

        self.assertEqual(len(rows), 6)
        self.assertTrue(rows[0].startswith("."))
        self.assertIn("│packages", rows[0])
        self.assertTrue(rows[1].startswith("packages"))
        self.assertIn("│x86_64-linux", rows[1])
        self.assertTrue(rows[2].startswith("devShells"))
        self.assertTrue(rows[-1].startswith("flake#.packages"))

    def test_cursor_row_is_highlighted(self) -> None:
        frame = build_frame(_context(cursor=1))
        self.assertIn(f"{PLAIN_THEME.item_selected}devShells", frame)
        self.assertNotIn(f"{PLAIN_THEME.item_selected}packages", frame)

    def test_list_start_scrolls_items(self) -> None:
        rows = _plain_rows(build_frame(_context(items=[f"item{i}" for i in range(10)], cursor=7, list_start=5)))
        self.assertTrue(rows[1].startswith("item5"))

    def test_lines_are_clipped_to_pane_widths(self) -> None:
        rows = _plain_rows(build_frame(_context(items=["x" * 100], preview_lines=["y" * 100], width=40)))
        for row in rows:
            self.assertLessEqual(len(row), 40)

    def test_help_keys_appear_when_enabled(self) -> None:
        rows = _plain_rows(build_frame(_context(show_help=True, width=120)))
        self.assertIn("q quit", rows[-1])
        self.assertIn("l in", rows[-1])

    def test_status_line_drops_right_text_when_it_cannot_fit(self) -> None:
        self.assertEqual(build_status_line("left", 10, "a very long right text"), "left")
        self.assertEqual(build_status_line("left", 20, "right"), "left" + " " * 10 + "right")

    def test_render_dual_pane_writes_frame_to_stdout(self) -> None:
        with mock.patch("flakeviewer.render.os.write") as write_mock, mock.patch(
            "flakeviewer.render.sys.stdout"
        ) as stdout_mock:
            stdout_mock.fileno.return_value = 1
            render_dual_pane(_context())

        fd, payload = write_mock.call_args.args
        self.assertEqual(fd, 1)
        self.assertTrue(payload.startswith(b"\x1b[H\x1b[J"))


class LayoutMathTests(unittest.TestCase):
    def test_clamp_left_width_keeps_both_panes_visible(self) -> None:
        self.assertEqual(clamp_left_width(100, 5), 20)
        self.assertEqual(clamp_left_width(100, 95), 88)

    def test_compute_left_width_uses_percent_when_present(self) -> None:
        self.assertEqual(compute_left_width(100), 50)
        self.assertEqual(compute_left_width(100, 30.0), 30)

    def test_list_rows_excludes_title_and_status(self) -> None:
        self.assertEqual(list_rows_for(24), 22)
        self.assertEqual(list_rows_for(1), 1)


class PreviewLinesTests(unittest.TestCase):
    def test_internal_preview_lists_children_in_child_color(self) -> None:
        lines = preview_display_lines(Internal(("a", "b")), DEFAULT_THEME, "monokai")
        self.assertEqual(lines, [f"{DEFAULT_THEME.preview_child}a\033[0m", f"{DEFAULT_THEME.preview_child}b\033[0m"])

    def test_failed_leaf_uses_error_color(self) -> None:
        lines = preview_display_lines(Leaf(value="error: boom\n", failed=True), DEFAULT_THEME, "monokai")
        self.assertEqual(lines, [f"{DEFAULT_THEME.preview_error}error: boom\033[0m"])

    def test_leaf_value_without_color_is_plain_text(self) -> None:
        lines = preview_display_lines(Leaf(value='{ a = 1; }\n'), PLAIN_THEME, "monokai", no_color=True)
        self.assertEqual(lines, ["{ a = 1; }"])

    def test_unevaluated_leaf_has_no_lines(self) -> None:
        self.assertEqual(preview_display_lines(Leaf(), PLAIN_THEME, "monokai"), [])

    def test_context_for_navigator_reflects_state(self) -> None:
        table = table_from_tree("flake#", {"packages": {"x86_64-linux": {}}, "lib": {}})
        navigator = Navigator(table, "flake#")

        context = context_for_navigator(
            navigator,
            list_start=0,
            width=80,
            max_lines=24,
            left_width=40,
            theme=PLAIN_THEME,
            style="monokai",
        )

        self.assertEqual(context.items, ["packages", "lib"])
        self.assertEqual(context.cursor, 0)
        self.assertEqual(context.left_title, "")
        self.assertEqual(context.right_title, "packages")
        self.assertEqual(context.status_text, "flake#.packages")
        self.assertEqual(context.preview_lines, ["x86_64-linux\033[0m"])


    def test_control_bytes_in_attribute_names_are_escaped(self) -> None:
        hostile = "x\x1b]0;pwned\x07"
        table = table_from_tree("flake#", {"pkgs": {hostile: "1"}, hostile: {"a": "1"}})
        navigator = Navigator(table, "flake#")
        frames = []
        for _ in range(2):
            context = context_for_navigator(
                navigator,
                list_start=0,
                width=80,
                max_lines=10,
                left_width=40,
                theme=PLAIN_THEME,
                style="monokai",
            )
            frames.append(build_frame(context))
            navigator.move_next()

        self.assertEqual(navigator.current_selected, "pkgs")
        for frame in frames:
            self.assertNotIn("\x07", frame)
            self.assertNotIn("\x1b]", frame)
            self.assertIn("x\\x1b]0;pwned\\x07", frame)


class ThemeResolutionTests(unittest.TestCase):
    def test_names_are_case_insensitive_with_default_fallback(self) -> None:
        self.assertIs(resolve_theme(" Ocean "), OCEAN_THEME)
        self.assertIs(resolve_theme("missing"), DEFAULT_THEME)
        self.assertIs(resolve_theme(None), DEFAULT_THEME)

    def test_no_color_forces_plain_theme(self) -> None:
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)


if __name__ == "__main__":
    unittest.main()
