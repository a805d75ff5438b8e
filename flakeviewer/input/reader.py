"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing for arrow and shift-arrow keys.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, first: bytes) -> bytes:
    """Collect continuation bytes for a multi-byte UTF-8 lead byte."""
    lead = first[0]
    if lead < 0xC0:
        return first
    expected = 1 if lead < 0xE0 else 2 if lead < 0xF0 else 3
    out = first
    for _ in range(expected):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        out += nxt
    return out


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` when ``timeout_ms`` elapses first."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch).decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in _CSI_FINAL_KEYS:
        return _CSI_FINAL_KEYS[seq]
    if seq == b"1":
        # Modified arrows: ESC [ 1 ; <mod> <final>
        seq2 = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if seq2 != b";":
            return "ESC"
        modifier = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if modifier == b"2" and final == b"C":
            return "SHIFT_RIGHT"
        if modifier == b"2" and final == b"D":
            return "SHIFT_LEFT"
        return "ESC"
    return "ESC"
