"""Navigation state value owned by the controller.

``NavigationState`` is frozen: every accepted transition builds a new value
with ``dataclasses.replace`` instead of mutating fields in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .effects import LoadDirectory
from .entries import Entry, Snapshot
from .sorting import SortKey

DEFAULT_TERMINAL_ROWS = 24


class Mode(Enum):
    BROWSE = "browse"
    SEARCH = "search"


@dataclass(frozen=True)
class NavigationState:
    current_path: Path
    entries: Snapshot = ()
    filtered: Snapshot = ()
    mode: Mode = Mode.BROWSE
    cursor: int = 0
    scroll_offset: int = 0
    sort_key: SortKey = SortKey.NAME
    search_token: str = ""
    command_input: str = ""
    status_message: str = ""
    pending_return_name: str = ""
    terminal_rows: int = DEFAULT_TERMINAL_ROWS
    pending_load: LoadDirectory | None = None
    next_request_id: int = 1

    @property
    def active_entries(self) -> Snapshot:
        """Snapshot governing cursor bounds and rendering for the current mode."""
        if self.mode is Mode.SEARCH:
            return self.filtered
        return self.entries

    @property
    def selected_entry(self) -> Entry | None:
        """Entry under the cursor, or ``None`` when the active snapshot is empty."""
        active = self.active_entries
        if 0 <= self.cursor < len(active):
            return active[self.cursor]
        return None

    @property
    def loading(self) -> bool:
        return self.pending_load is not None


__all__ = [
    "DEFAULT_TERMINAL_ROWS",
    "Mode",
    "NavigationState",
]
