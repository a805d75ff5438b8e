"""Persistent JSON config helpers.

Stores the pane-width preset, theme and highlight style, and the evaluator
command. All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
import shlex
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "flakeviewer"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never interrupts a session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def load_left_pane_percent() -> float | None:
    """Read the split-pane left width, constrained to the open interval (0, 100)."""
    value = load_config().get("left_pane_percent")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0 or value >= 100:
        return None
    return float(value)


def save_left_pane_percent(total_width: int, left_width: int) -> None:
    """Store the left pane width as a percentage clamped to ``[1.0, 99.0]``."""
    if total_width <= 0:
        return
    percent = max(1.0, min(99.0, (left_width / total_width) * 100.0))
    config = load_config()
    config["left_pane_percent"] = round(percent, 2)
    save_config(config)


def _load_nonempty_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_nonempty_string("theme")


def load_style_name() -> str | None:
    """Load persisted Pygments style name, returning ``None`` when unset/invalid."""
    return _load_nonempty_string("style")


def _coerce_argv(value: object) -> tuple[str, ...]:
    """Accept either a shell-style string or a list of strings."""
    if isinstance(value, str):
        try:
            return tuple(shlex.split(value))
        except ValueError:
            return ()
    if isinstance(value, list) and all(isinstance(part, str) for part in value):
        return tuple(value)
    return ()


def load_nix_command() -> tuple[str, ...]:
    """Return the configured evaluator command prefix, or ``()`` for the default."""
    return _coerce_argv(load_config().get("nix_command"))


def load_nix_args() -> tuple[str, ...]:
    """Return extra arguments inserted after ``eval``."""
    return _coerce_argv(load_config().get("nix_args"))
