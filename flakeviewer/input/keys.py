"""Normal-mode keyboard handling.

Maps key tokens onto navigator transitions. Transitions that query the
evaluator go through ``run_transition`` so the runtime can show a busy status
before the blocking call.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..navigator import Navigator
from ..runtime.state import ViewState
from .key_registry import KeyBinding, KeyRegistry

PANE_RESIZE_STEP = 2
MAX_COUNT = 999
DIGIT_KEYS = frozenset("0123456789")

NORMAL_KEYS = KeyRegistry(
    (
        KeyBinding(("j", "DOWN"), "next", hint="move", label="j/k"),
        KeyBinding(("k", "UP"), "previous"),
        KeyBinding(("l", "RIGHT", "ENTER"), "step_in", hint="in"),
        KeyBinding(("h", "LEFT"), "step_out", hint="out"),
        KeyBinding(("g", "HOME"), "first", hint="first/last", label="g/G"),
        KeyBinding(("G", "END"), "last"),
        KeyBinding(("r",), "reload", hint="reload"),
        KeyBinding(("?",), "toggle_help", hint="help"),
        KeyBinding(("SHIFT_LEFT",), "shrink_left"),
        KeyBinding(("SHIFT_RIGHT",), "grow_left"),
        KeyBinding(("q",), "quit", hint="quit"),
    )
)


@dataclass(frozen=True)
class NormalKeyContext:
    """State and bound operations required for normal-mode key handling."""

    state: ViewState
    navigator: Navigator
    run_transition: Callable[[Callable[[], object]], None]
    resize_left_pane: Callable[[int, int], None]


def _take_count(state: ViewState) -> int:
    count = int(state.count_buffer) if state.count_buffer else 1
    state.count_buffer = ""
    return max(1, min(MAX_COUNT, count))


def handle_normal_key(key: str, term_columns: int, context: NormalKeyContext) -> bool:
    """Handle one key and return ``True`` when the app should quit."""
    state = context.state
    navigator = context.navigator

    if key in DIGIT_KEYS and (state.count_buffer or key != "0"):
        state.count_buffer = (state.count_buffer + key)[-3:]
        return False

    count = _take_count(state)
    action = NORMAL_KEYS.action_for(key)
    if action is None:
        return False
    if action == "quit":
        return True

    if action == "toggle_help":
        state.show_help = not state.show_help
        state.dirty = True
    elif action == "shrink_left":
        context.resize_left_pane(term_columns, -PANE_RESIZE_STEP)
    elif action == "grow_left":
        context.resize_left_pane(term_columns, PANE_RESIZE_STEP)
    elif action == "step_in":
        # Leaf previews have nothing to enter; skip the busy redraw too.
        if navigator.preview_children:
            context.run_transition(navigator.step_in)
    else:
        transitions: dict[str, Callable[[], object]] = {
            "next": lambda: navigator.move(count),
            "previous": lambda: navigator.move(-count),
            "step_out": navigator.step_out,
            "first": navigator.move_first,
            "last": navigator.move_last,
            "reload": navigator.reload,
        }
        context.run_transition(transitions[action])
    return False
