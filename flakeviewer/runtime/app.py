"""Runtime composition layer for flakeviewer.

Builds the navigator and view state, wires rendering and key handling into
the loop, and owns the terminal for the duration of the session.
"""

from __future__ import annotations

import logging
import shutil
import sys
from collections.abc import Callable

from ..evaluator import AttributeEvaluator
from ..highlight import normalize_style
from ..input import NormalKeyContext, handle_normal_key
from ..navigator import Navigator
from ..render import (
    clamp_left_width,
    compute_left_width,
    context_for_navigator,
    render_dual_pane,
)
from ..ui_theme import resolve_theme
from .config import load_left_pane_percent, save_left_pane_percent
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .state import ViewState
from .terminal import TerminalController

logger = logging.getLogger(__name__)

BUSY_STATUS = "evaluating…"


def run_viewer(
    root_path: str,
    evaluator: AttributeEvaluator,
    *,
    theme_name: str | None = None,
    style: str | None = None,
    no_color: bool = False,
) -> None:
    """Explore ``root_path`` interactively until the user quits.

    The root is queried before the terminal switches to raw mode, so startup
    failures are reported on the normal screen.
    """
    navigator = Navigator(evaluator, root_path)
    logger.info("exploring %s (%d attributes)", root_path, len(navigator.current_items))

    theme = resolve_theme(theme_name, no_color=no_color)
    style = normalize_style(style)
    term = shutil.get_terminal_size((80, 24))
    state = ViewState(left_width=compute_left_width(term.columns, load_left_pane_percent()))
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())

    def render(columns: int, lines: int) -> None:
        render_dual_pane(
            context_for_navigator(
                navigator,
                list_start=state.list_start,
                width=columns,
                max_lines=lines,
                left_width=state.left_width,
                theme=theme,
                style=style,
                no_color=no_color,
                show_help=state.show_help,
                status_message=state.status_message,
            )
        )

    def run_transition(action: Callable[[], object]) -> None:
        current = shutil.get_terminal_size((80, 24))
        state.status_message = BUSY_STATUS
        render(current.columns, current.lines)
        try:
            action()
        finally:
            state.status_message = ""
            state.dirty = True

    def resize_left_pane(columns: int, delta: int) -> None:
        previous = state.left_width
        state.left_width = clamp_left_width(columns, state.left_width + delta)
        if state.left_width == previous:
            return
        save_left_pane_percent(columns, state.left_width)
        state.dirty = True

    key_context = NormalKeyContext(
        state=state,
        navigator=navigator,
        run_transition=run_transition,
        resize_left_pane=resize_left_pane,
    )

    def handle_key(key: str, columns: int) -> bool:
        return handle_normal_key(key, columns, key_context)

    run_main_loop(
        state,
        navigator,
        terminal,
        stdin_fd,
        RuntimeLoopTiming(),
        RuntimeLoopCallbacks(render=render, handle_key=handle_key),
    )
