"""Display-width aware text shaping for terminal rows.

Rows are shaped as plain text and styled afterwards, so clipping never has to
step over escape sequences. Control bytes from external sources (command
output, odd filenames) are escaped before they reach the terminal.
"""

from __future__ import annotations

import re
import unicodedata

TAB_STOP = 8
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    col = 0
    for ch in text:
        col += char_display_width(ch, col)
    return col


def sanitize_terminal_text(text: str) -> str:
    """Escape control bytes (other than tab and newline) as ``\\xNN``."""
    if _CONTROL_RE.search(text) is None:
        return text
    text = text.replace("\r\n", "\n")
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", text)


def clip_text(text: str, max_cols: int) -> str:
    """Trim plain ``text`` to at most ``max_cols`` display columns.

    Tabs are expanded into spaces so clipping aligns with terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
    return "".join(out)


def fit_text(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` and right-pad it with spaces to exactly fill it."""
    clipped = clip_text(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


__all__ = [
    "TAB_STOP",
    "char_display_width",
    "display_width",
    "sanitize_terminal_text",
    "clip_text",
    "fit_text",
]
