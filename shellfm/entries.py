"""Domain datatypes for one directory listing."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Entry:
    """One directory child observed at listing time.

    ``size`` and ``modified_ns`` are ``None`` when the entry could not be
    stat'ed; sorting treats ``None`` as the smallest/oldest value.
    """

    name: str
    is_dir: bool
    size: int | None = None
    modified_ns: int | None = None


Snapshot = tuple[Entry, ...]


def index_of_name(snapshot: Snapshot, name: str) -> int:
    """Return index of the first entry named exactly ``name``, else ``0``."""
    for idx, entry in enumerate(snapshot):
        if entry.name == name:
            return idx
    return 0


__all__ = [
    "Entry",
    "Snapshot",
    "index_of_name",
]
