"""Rendering engine for the split listing/preview terminal view.

Defines render context data and writes fully composed ANSI frames. Frame
composition is pure; only :func:`render_dual_pane` touches the terminal.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from ..ansi import clip_ansi_line, display_width, fit_ansi_line
from ..evaluator import Classification, Internal
from ..highlight import colorize_value, error_lines, sanitize_label
from ..input.keys import NORMAL_KEYS
from ..navigator import Navigator
from ..ui_theme import DEFAULT_THEME, UITheme

DIVIDER = "│"
MIN_LEFT_WIDTH = 12


def compute_left_width(total_width: int, percent: float | None = None) -> int:
    if percent is not None:
        return clamp_left_width(total_width, round(total_width * percent / 100.0))
    return clamp_left_width(total_width, total_width // 2)


def clamp_left_width(total_width: int, desired_left: int) -> int:
    max_possible = max(1, total_width - 2)
    min_left = max(MIN_LEFT_WIDTH, min(20, total_width - MIN_LEFT_WIDTH))
    max_left = max(min_left, total_width - MIN_LEFT_WIDTH)
    max_left = min(max_left, max_possible)
    min_left = min(min_left, max_left)
    return max(min_left, min(desired_left, max_left))


@dataclass
class RenderContext:
    items: list[str]
    cursor: int | None
    list_start: int
    left_title: str
    right_title: str
    preview_lines: list[str]
    status_text: str
    width: int
    max_lines: int
    left_width: int
    theme: UITheme = DEFAULT_THEME
    show_help: bool = True


def preview_display_lines(
    preview: Classification,
    theme: UITheme,
    style: str,
    no_color: bool = False,
) -> list[str]:
    """Turn a preview classification into styled display lines."""
    if isinstance(preview, Internal):
        return [f"{theme.preview_child}{sanitize_label(name)}{theme.reset}" for name in preview.children]
    if preview.value is None:
        return []
    if preview.failed:
        return [f"{theme.preview_error}{line}{theme.reset}" for line in error_lines(preview.value)]
    return colorize_value(preview.value, style=style, no_color=no_color)


def context_for_navigator(
    navigator: Navigator,
    *,
    list_start: int,
    width: int,
    max_lines: int,
    left_width: int,
    theme: UITheme,
    style: str,
    no_color: bool = False,
    show_help: bool = True,
    status_message: str = "",
) -> RenderContext:
    return RenderContext(
        items=[sanitize_label(item) for item in navigator.current_items],
        cursor=navigator.current_items.cursor,
        list_start=list_start,
        left_title=sanitize_label(navigator.title),
        right_title=sanitize_label(navigator.current_selected),
        preview_lines=preview_display_lines(navigator.preview, theme, style, no_color),
        status_text=status_message or sanitize_label(navigator.preview_path),
        width=width,
        max_lines=max_lines,
        left_width=left_width,
        theme=theme,
        show_help=show_help,
    )


def list_rows_for(max_lines: int) -> int:
    """Rows available to list items: the frame minus title and status rows."""
    return max(1, max_lines - 2)


def help_text(theme: UITheme) -> str:
    parts = [f"{theme.status_key}{key}{theme.reset}{theme.status} {label}" for key, label in NORMAL_KEYS.hints()]
    return "  ".join(parts)


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    """Left-align ``left_text`` and right-align ``right_text`` in one row.

    The right text is dropped when both do not fit; the left text is clipped.
    """
    usable = max(1, width - 1)
    right_width = display_width(right_text)
    if not right_text or right_width + 1 >= usable:
        return clip_ansi_line(left_text, usable)
    left = clip_ansi_line(left_text, usable - right_width - 1)
    gap = " " * (usable - display_width(left) - right_width)
    return f"{left}{gap}{right_text}"


def _list_row(context: RenderContext, row: int, width: int) -> str:
    theme = context.theme
    idx = context.list_start + row
    if idx >= len(context.items):
        return " " * width
    text = context.items[idx]
    if idx == context.cursor:
        return f"{theme.item_selected}{fit_ansi_line(text, width)}{theme.reset}"
    return fit_ansi_line(f"{theme.item}{text}{theme.reset}", width)


def build_frame(context: RenderContext) -> str:
    """Compose one full-screen frame for ``context``."""
    theme = context.theme
    left_width = clamp_left_width(context.width, context.left_width)
    right_width = max(1, context.width - left_width - len(DIVIDER) - 1)
    list_rows = list_rows_for(context.max_lines)
    divider = f"{theme.divider}{DIVIDER}{theme.reset}"

    out: list[str] = ["\033[H\033[J"]
    left_title = fit_ansi_line(f"{theme.title}{context.left_title or '#'}{theme.reset}", left_width)
    right_title = fit_ansi_line(f"{theme.title}{context.right_title}{theme.reset}", right_width)
    out.append(f"{left_title}{divider}{right_title}\r\n")

    for row in range(list_rows):
        out.append(_list_row(context, row, left_width))
        out.append(divider)
        if row < len(context.preview_lines):
            out.append(fit_ansi_line(context.preview_lines[row], right_width))
        out.append("\r\n")

    right_text = help_text(theme) if context.show_help else ""
    status = build_status_line(context.status_text, context.width, right_text)
    out.append(f"{theme.status}{fit_ansi_line(status, max(1, context.width - 1))}{theme.reset}")
    return "".join(out)


def render_dual_pane(context: RenderContext) -> None:
    os.write(sys.stdout.fileno(), build_frame(context).encode("utf-8", errors="replace"))
