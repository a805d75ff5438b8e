"""Presentation-side state that lives next to the navigator.

Scroll offsets, pane width, and transient status text. Navigation state itself
belongs to :class:`flakeviewer.navigator.Navigator`.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ViewState:
    left_width: int
    list_start: int = 0
    show_help: bool = True
    count_buffer: str = ""
    status_message: str = ""
    dirty: bool = True

    def scroll_to_cursor(self, cursor: int | None, visible_rows: int, item_count: int) -> None:
        """Adjust ``list_start`` so ``cursor`` sits inside the visible window."""
        prev_start = self.list_start
        rows = max(1, visible_rows)
        if cursor is None:
            self.list_start = 0
        elif cursor < self.list_start:
            self.list_start = cursor
        elif cursor >= self.list_start + rows:
            self.list_start = cursor - rows + 1
        self.list_start = max(0, min(self.list_start, max(0, item_count - rows)))
        if self.list_start != prev_start:
            self.dirty = True
