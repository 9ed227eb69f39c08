"""Case-insensitive name filtering for directory snapshots."""

from __future__ import annotations

from .entries import Snapshot


def filter_entries(snapshot: Snapshot, token: str) -> Snapshot:
    """Return entries whose name contains ``token``, ignoring case.

    An empty token returns ``snapshot`` itself. Order is always inherited
    from the input.
    """
    if not token:
        return snapshot
    needle = token.casefold()
    return tuple(entry for entry in snapshot if needle in entry.name.casefold())


__all__ = ["filter_entries"]
