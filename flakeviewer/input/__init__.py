"""Input-layer public API for key decoding and interaction handlers.

Low-level terminal decoding (`read_key`) is kept apart from the key handlers
the runtime loop dispatches to.
"""

from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key
from .key_registry import KeyBinding, KeyRegistry
from .keys import NORMAL_KEYS, NormalKeyContext, handle_normal_key

__all__ = [
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyBinding",
    "KeyRegistry",
    "NORMAL_KEYS",
    "NormalKeyContext",
    "handle_normal_key",
]
