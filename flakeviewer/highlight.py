"""Leaf value sanitization and Nix syntax highlighting.

Evaluator output is untrusted terminal text: control bytes are escaped before
anything reaches the screen. Successful values are colorized with Pygments'
Nix lexer; error text is left plain so the theme can style it.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import NixLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


_LABEL_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t"})


def sanitize_label(text: str) -> str:
    """Escape every control byte, line breaks included, for single-row labels."""
    return sanitize_terminal_text(text).translate(_LABEL_ESCAPES)


def normalize_style(style: str | None) -> str:
    if not style:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


@lru_cache(maxsize=8)
def _formatter_for_style(style: str) -> Terminal256Formatter:
    return Terminal256Formatter(style=style)


@lru_cache(maxsize=1)
def _nix_lexer() -> NixLexer:
    return NixLexer(stripnl=False)


def colorize_value(value: str, style: str = DEFAULT_STYLE, no_color: bool = False) -> list[str]:
    """Return display lines for an evaluated leaf value."""
    text = sanitize_terminal_text(value)
    if no_color or not text.strip():
        return text.splitlines()
    rendered = pygments_highlight(text, _nix_lexer(), _formatter_for_style(normalize_style(style)))
    return rendered.splitlines()


def error_lines(stderr: str) -> list[str]:
    return sanitize_terminal_text(stderr).splitlines()
