"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens
(``UP``, ``ENTER``, ``ESC``, ``CTRL_C``, or one printable character).
Handles ESC-sequence timing and multi-byte UTF-8 characters.
"""

from __future__ import annotations

import os
import select

from .keymap import BACKSPACE, CTRL_C, DOWN, ENTER, ESC, LEFT, RIGHT, UP

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_TOKENS: dict[bytes, str] = {
    b"\x03": CTRL_C,
    b"\x08": BACKSPACE,
    b"\x7f": BACKSPACE,
    b"\r": ENTER,
    b"\n": ENTER,
}

_ARROW_TOKENS: dict[bytes, str] = {
    b"A": UP,
    b"B": DOWN,
    b"C": RIGHT,
    b"D": LEFT,
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_sequence_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8_char(fd: int, lead: bytes) -> str:
    data = lead
    for _ in range(_utf8_sequence_length(lead[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def _skip_csi_sequence(fd: int, first: bytes) -> None:
    """Consume an unrecognized CSI sequence up to its final byte."""
    part: bytes | None = first
    consumed = 0
    while part is not None and not (0x40 <= part[0] <= 0x7E) and consumed < 32:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        consumed += 1


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` when nothing arrived in time.

    A lone ESC is reported once no sequence byte follows within
    ``ESC_SEQUENCE_TIMEOUT_MS``. Unrecognized escape sequences are consumed
    and reported as ``""``.
    """
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

    if ch in _CONTROL_TOKENS:
        return _CONTROL_TOKENS[ch]

    if ch != b"\x1b":
        if ch[0] >= 0x80:
            return _read_utf8_char(fd, ch)
        return ch.decode("utf-8", errors="replace")

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return ESC
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return ESC
    final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if final is None:
        return ESC
    if final in _ARROW_TOKENS:
        return _ARROW_TOKENS[final]
    _skip_csi_sequence(fd, final)
    return ""


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "read_key",
]
