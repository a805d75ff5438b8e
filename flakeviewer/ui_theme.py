"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (pane chrome, listings, status line). Syntax
highlighting of leaf values is a separate Pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reset: str
    title: str
    item: str
    item_selected: str
    preview_child: str
    preview_error: str
    status: str
    status_key: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reset="\033[0m",
    title="\033[1;38;5;81m",
    item="\033[38;5;252m",
    item_selected="\033[1;97;40m",
    preview_child="\033[32m",
    preview_error="\033[38;5;203m",
    status="\033[7m",
    status_key="\033[38;5;229m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    item="\033[38;5;153m",
    item_selected="\033[1;38;5;231;48;5;24m",
    preview_child="\033[38;5;84m",
    preview_error="\033[38;5;215m",
    status="\033[38;5;231;48;5;24m",
    status_key="\033[1;38;5;45m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reset="\033[0m",
    title="",
    item="",
    item_selected="\033[7m",
    preview_child="",
    preview_error="",
    status="\033[7m",
    status_key="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
