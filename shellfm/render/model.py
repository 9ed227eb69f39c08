"""Pure render model derived from ``NavigationState``.

The model carries everything a frame writer needs and nothing about layout
or styling. Building it never mutates state.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..controller import viewport_for
from ..state import Mode, NavigationState
from ..sorting import SortKey
from ..viewport import visible_range

BROWSE_TITLE = "File Manager"
SEARCH_TITLE = "Search Mode"
SEARCH_MODE_HINT = "Search Mode: ESC to exit, type to search, 1-4 to sort, ↑↓ to navigate"
SEARCH_HELP = "Enter: open directory | j/k: move"
BROWSE_HELP = (
    "Built-in: cd, ls, pwd, clear, quit | System commands: touch, mkdir, rm, cp, mv, cat, grep, find, etc."
    " | Navigation: ↑↓, ←→, Enter | ESC: Search Mode"
)
EMPTY_DIRECTORY_MESSAGE = "No files in this directory"
NO_MATCHES_MESSAGE = "No files match your search"
SORT_LEGEND = "1=name, 2=size, 3=time, 4=type"


@dataclass(frozen=True)
class RenderRow:
    name: str
    is_dir: bool
    selected: bool


@dataclass(frozen=True)
class RenderModel:
    title: str
    current_path: str
    mode: Mode
    search_token: str
    sort_key: SortKey
    rows: tuple[RenderRow, ...]
    has_more_above: bool
    has_more_below: bool
    status_message: str
    command_line: str
    help_line: str
    empty_message: str = ""
    loading: bool = False


def build_render_model(state: NavigationState) -> RenderModel:
    """Project ``state`` into the rows and labels visible this frame."""
    active = state.active_entries
    viewport = viewport_for(state)
    start, end = visible_range(viewport, len(active))
    rows = tuple(
        RenderRow(name=entry.name, is_dir=entry.is_dir, selected=idx == state.cursor)
        for idx, entry in enumerate(active[start:end], start=start)
    )

    searching = state.mode is Mode.SEARCH
    empty_message = ""
    if not active:
        empty_message = NO_MATCHES_MESSAGE if searching and state.search_token else EMPTY_DIRECTORY_MESSAGE

    return RenderModel(
        title=SEARCH_TITLE if searching else BROWSE_TITLE,
        current_path=str(state.current_path),
        mode=state.mode,
        search_token=state.search_token,
        sort_key=state.sort_key,
        rows=rows,
        has_more_above=viewport.has_more_above,
        has_more_below=viewport.has_more_below,
        status_message=state.status_message,
        command_line=SEARCH_MODE_HINT if searching else f"$ {state.command_input}_",
        help_line=SEARCH_HELP if searching else BROWSE_HELP,
        empty_message=empty_message,
        loading=state.loading,
    )


__all__ = [
    "RenderRow",
    "RenderModel",
    "build_render_model",
    "SORT_LEGEND",
]
