"""Navigation state machine over the evaluator's attribute tree.

Holds the current level listing, the highlighted child, and a preview of that
child computed one level ahead. Every transition re-queries the evaluator so
the preview never lags behind the cursor.
"""

from __future__ import annotations

import logging

from .errors import EvaluatorError, StartupError
from .evaluator import AttributeEvaluator, Classification, Internal, Leaf
from .selectable import SelectableList

logger = logging.getLogger(__name__)

NONE_SELECTED = "none"
REFERENCE_DELIMITER = "#"
SEGMENT_DELIMITER = "."


def normalize_root_path(raw: str) -> str:
    """Validate a user-supplied root and ensure it carries a ``#``."""
    path = raw.strip()
    if not path:
        raise StartupError("root path is empty")
    if path.endswith(SEGMENT_DELIMITER):
        raise StartupError(f"root path must not end with '.': {raw!r}")
    if REFERENCE_DELIMITER not in path:
        path += REFERENCE_DELIMITER
    return path


def child_path(path: str, name: str) -> str:
    return f"{path}{SEGMENT_DELIMITER}{name}"


def parent_path(path: str) -> str:
    """Drop the last ``.`` segment after the ``#``; roots come back unchanged.

    Dots inside the flake reference itself (``nixpkgs/nixos-24.05#``) are never
    treated as attribute separators.
    """
    reference, delimiter, attribute = path.rpartition(REFERENCE_DELIMITER)
    head, dot, _tail = attribute.rpartition(SEGMENT_DELIMITER)
    if not dot:
        return path
    return f"{reference}{delimiter}{head}"


def display_title(path: str) -> str:
    """Strip the flake reference, keeping only the attribute part."""
    return path.rpartition(REFERENCE_DELIMITER)[2]


class Navigator:
    """Current position in the tree plus the preview of the highlighted child.

    Construction performs the initial query; the root must classify as an
    attribute set with at least one child. ``EvaluatorError`` raised while
    classifying during later transitions is not caught here.
    """

    def __init__(self, evaluator: AttributeEvaluator, root_path: str) -> None:
        self.evaluator = evaluator
        try:
            root = evaluator.classify(root_path)
        except EvaluatorError as exc:
            raise StartupError(f"cannot list {root_path!r}: {exc.stderr.strip() or exc}") from exc
        if not isinstance(root, Internal) or not root.children:
            raise StartupError(f"{root_path!r} has no attributes to explore")

        self.current_path = root_path
        self.current_items: SelectableList[str] = SelectableList.with_items(root.children)
        self.current_selected = NONE_SELECTED
        self.preview_path = child_path(root_path, NONE_SELECTED)
        self.preview: Classification = Leaf()
        self._refresh_preview()

    @property
    def preview_children(self) -> tuple[str, ...]:
        if isinstance(self.preview, Internal):
            return self.preview.children
        return ()

    @property
    def title(self) -> str:
        return display_title(self.current_path)

    def _refresh_preview(self) -> None:
        selected = self.current_items.selected
        self.current_selected = selected.strip() if selected is not None else NONE_SELECTED
        self.preview_path = child_path(self.current_path, self.current_selected)

        if selected is None:
            # Nothing to classify; let the evaluator explain the empty level.
            self.preview = self.evaluator.evaluate(self.preview_path)
            return

        classification = self.evaluator.classify(self.preview_path)
        if isinstance(classification, Leaf):
            classification = self.evaluator.evaluate(self.preview_path)
        self.preview = classification

    def move(self, delta: int) -> None:
        """Move the cursor ``delta`` steps with wrap-around and refresh the preview."""
        if delta == 0:
            return
        step = self.current_items.next if delta > 0 else self.current_items.previous
        for _ in range(abs(delta)):
            step()
        self._refresh_preview()

    def move_next(self) -> None:
        self.move(1)

    def move_previous(self) -> None:
        self.move(-1)

    def move_first(self) -> None:
        self.current_items.select(0)
        self._refresh_preview()

    def move_last(self) -> None:
        self.current_items.select(len(self.current_items) - 1)
        self._refresh_preview()

    def step_in(self) -> bool:
        """Descend into the highlighted child when its preview has children."""
        children = self.preview_children
        if not children:
            return False
        self.current_path = child_path(self.current_path, self.current_selected)
        self.current_items = SelectableList.with_items(children)
        logger.debug("stepped into %s", self.current_path)
        self._refresh_preview()
        return True

    def step_out(self) -> None:
        """Ascend one level and re-list it; at the root this re-lists the root."""
        self.current_path = parent_path(self.current_path)
        self.current_items = SelectableList.with_items(self._list_children(self.current_path))
        logger.debug("stepped out to %s", self.current_path)
        self._refresh_preview()

    def reload(self) -> None:
        """Re-query the current level, keeping the cursor index when still valid."""
        cursor = self.current_items.cursor
        self.current_items = SelectableList.with_items(self._list_children(self.current_path))
        if cursor is not None:
            self.current_items.select(cursor)
        self._refresh_preview()

    def _list_children(self, path: str) -> tuple[str, ...]:
        classification = self.evaluator.classify(path)
        if isinstance(classification, Internal):
            return classification.children
        return ()
