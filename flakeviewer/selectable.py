"""Ordered item list with a wrap-around cursor."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class SelectableList(Generic[T]):
    """Items plus a cursor that is ``None`` exactly when there are no items."""

    def __init__(self, items: list[T], cursor: int | None) -> None:
        self.items = items
        self.cursor = cursor

    @classmethod
    def with_items(cls, items: Iterable[T]) -> SelectableList[T]:
        """Build a list with the cursor on the first item, if any."""
        materialized = list(items)
        return cls(materialized, 0 if materialized else None)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def is_empty(self) -> bool:
        return not self.items

    @property
    def selected(self) -> T | None:
        if self.cursor is None:
            return None
        return self.items[self.cursor]

    def select(self, index: int) -> None:
        """Move the cursor to ``index``, clamped into range."""
        if not self.items:
            self.cursor = None
            return
        self.cursor = max(0, min(index, len(self.items) - 1))

    def next(self) -> None:
        if not self.items:
            return
        if self.cursor is None or self.cursor >= len(self.items) - 1:
            self.cursor = 0
        else:
            self.cursor += 1

    def previous(self) -> None:
        if not self.items:
            return
        if self.cursor is None or self.cursor == 0:
            self.cursor = len(self.items) - 1
        else:
            self.cursor -= 1
