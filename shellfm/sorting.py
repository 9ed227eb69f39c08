"""Sort keys and stable ordering for directory snapshots."""

from __future__ import annotations

from enum import Enum

from .entries import Entry, Snapshot


class SortKey(Enum):
    NAME = "name"
    SIZE = "size"
    TIME = "time"
    TYPE = "type"


SORT_KEY_DIGITS: dict[str, SortKey] = {
    "1": SortKey.NAME,
    "2": SortKey.SIZE,
    "3": SortKey.TIME,
    "4": SortKey.TYPE,
}


def parse_sort_key(text: str) -> SortKey | None:
    """Map a digit ``1``..``4`` or a key name to ``SortKey``."""
    if text in SORT_KEY_DIGITS:
        return SORT_KEY_DIGITS[text]
    try:
        return SortKey(text.strip().lower())
    except ValueError:
        return None


def _dirs_first_key(entry: Entry) -> tuple[bool, str]:
    return (not entry.is_dir, entry.name)


def _size_key(entry: Entry) -> int:
    return -1 if entry.size is None else entry.size


def _time_key(entry: Entry) -> int:
    return -1 if entry.modified_ns is None else entry.modified_ns


def sort_entries(snapshot: Snapshot, key: SortKey) -> Snapshot:
    """Return ``snapshot`` ordered by ``key``; ties keep their input order.

    ``NAME`` and ``TYPE`` both list directories first, then names ascending.
    ``SIZE`` and ``TIME`` are descending (largest / newest first).
    """
    if key in (SortKey.NAME, SortKey.TYPE):
        return tuple(sorted(snapshot, key=_dirs_first_key))
    if key is SortKey.SIZE:
        # reverse=True keeps equal elements in their original order.
        return tuple(sorted(snapshot, key=_size_key, reverse=True))
    if key is SortKey.TIME:
        return tuple(sorted(snapshot, key=_time_key, reverse=True))
    raise ValueError(f"unknown sort key: {key!r}")


__all__ = [
    "SortKey",
    "SORT_KEY_DIGITS",
    "parse_sort_key",
    "sort_entries",
]
