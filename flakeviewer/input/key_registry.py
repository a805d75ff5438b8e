"""Static key table: key tokens to named actions, plus status-line hints."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyBinding:
    """Key tokens that trigger one named action.

    ``hint`` is the label shown in the status line; bindings without one stay
    out of the hints. ``label`` overrides how the keys are spelled there.
    """

    keys: tuple[str, ...]
    action: str
    hint: str = ""
    label: str = ""


class KeyRegistry:
    def __init__(self, bindings: Iterable[KeyBinding] = ()) -> None:
        self._actions: dict[str, str] = {}
        self._bindings: list[KeyBinding] = []
        for binding in bindings:
            self.bind(binding)

    def bind(self, binding: KeyBinding) -> KeyRegistry:
        """Add ``binding``; later bindings win for keys bound twice."""
        for key in binding.keys:
            self._actions[key] = binding.action
        self._bindings.append(binding)
        return self

    def action_for(self, key: str) -> str | None:
        return self._actions.get(key)

    def hints(self) -> list[tuple[str, str]]:
        return [(binding.label or binding.keys[0], binding.hint) for binding in self._bindings if binding.hint]
