"""Viewport windowing over a cursor-addressed list.

Pure helpers: the scroll offset lives in ``NavigationState`` and is
recomputed after every cursor, mode, size, sort, or filter change.
"""

from __future__ import annotations

from dataclasses import dataclass

from .state import Mode

# Title, directory, indicator, three status rows, input, and hint rows.
BROWSE_RESERVED_ROWS = 8
# Browse layout plus the search prompt and sort legend rows.
SEARCH_RESERVED_ROWS = 10


@dataclass(frozen=True)
class Viewport:
    scroll_offset: int
    visible_rows: int
    has_more_above: bool
    has_more_below: bool


def reserved_rows_for(mode: Mode) -> int:
    """Return header/footer rows the frame layout keeps for ``mode``."""
    return SEARCH_RESERVED_ROWS if mode is Mode.SEARCH else BROWSE_RESERVED_ROWS


def visible_rows_for(total_rows: int, reserved_rows: int) -> int:
    return max(1, total_rows - reserved_rows)


def compute_viewport(
    cursor: int,
    list_length: int,
    total_rows: int,
    reserved_rows: int,
    scroll_offset: int = 0,
) -> Viewport:
    """Adjust ``scroll_offset`` so ``cursor`` stays inside the visible window.

    The offset only moves when the cursor leaves the window, and is clamped
    into ``[0, max(0, list_length - 1)]``.
    """
    visible_rows = visible_rows_for(total_rows, reserved_rows)
    offset = scroll_offset
    if cursor < offset:
        offset = cursor
    if cursor >= offset + visible_rows:
        offset = cursor - visible_rows + 1
    offset = max(0, min(offset, max(0, list_length - 1)))
    return Viewport(
        scroll_offset=offset,
        visible_rows=visible_rows,
        has_more_above=offset > 0,
        has_more_below=offset + visible_rows < list_length,
    )


def visible_range(viewport: Viewport, list_length: int) -> tuple[int, int]:
    """Return half-open ``(start, end)`` indices of rows inside ``viewport``."""
    start = min(viewport.scroll_offset, list_length)
    end = min(list_length, start + viewport.visible_rows)
    return start, end


__all__ = [
    "BROWSE_RESERVED_ROWS",
    "SEARCH_RESERVED_ROWS",
    "Viewport",
    "reserved_rows_for",
    "visible_rows_for",
    "compute_viewport",
    "visible_range",
]
