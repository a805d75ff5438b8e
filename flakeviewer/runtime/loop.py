"""Main interactive event loop for the terminal UI.

Waits for one key at a time, dispatches it, and redraws when state changed or
the terminal was resized. Feature logic lives in the injected callbacks.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input import read_key
from ..navigator import Navigator
from ..render import clamp_left_width, list_rows_for
from .state import ViewState
from .terminal import TerminalController


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_poll_ms: int = 1000


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    render: Callable[[int, int], None]
    handle_key: Callable[[str, int], bool]


def run_main_loop(
    state: ViewState,
    navigator: Navigator,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the interactive loop until a key handler asks to quit.

    Exceptions raised by callbacks propagate after the terminal is restored.
    """
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                state.left_width = clamp_left_width(term.columns, state.left_width)
                state.dirty = True
            state.scroll_to_cursor(
                navigator.current_items.cursor,
                list_rows_for(term.lines),
                len(navigator.current_items),
            )

            if state.dirty:
                callbacks.render(term.columns, term.lines)
                state.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=timing.key_poll_ms)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue
            if callbacks.handle_key(key, term.columns):
                break
