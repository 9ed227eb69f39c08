"""Directory listing provider.

Scans one directory into an immutable snapshot of ``Entry`` values.
Per-entry metadata failures degrade to ``None`` sentinels; only failures to
open the directory itself are reported as ``ListingError``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .effects import LoadDirectory
from .entries import Entry, Snapshot
from .errors import ListingError
from .events import DirectoryLoaded

logger = logging.getLogger(__name__)


def _entry_is_dir(child: os.DirEntry) -> bool:
    """Return whether ``child`` is a directory or a symlink to one."""
    try:
        return child.is_dir(follow_symlinks=True)
    except OSError:
        return False


def _entry_from_dir_entry(child: os.DirEntry) -> Entry:
    is_dir = _entry_is_dir(child)
    size: int | None = None
    modified_ns: int | None = None
    try:
        stat = child.stat(follow_symlinks=False)
        size = int(stat.st_size)
        modified_ns = int(stat.st_mtime_ns)
    except OSError:
        pass
    return Entry(name=child.name, is_dir=is_dir, size=size, modified_ns=modified_ns)


def read_directory(path: Path) -> Snapshot:
    """Return immediate children of ``path`` in scan order.

    Raises ``ListingError`` when ``path`` is missing, unreadable, or not a
    directory.
    """
    entries: list[Entry] = []
    try:
        with os.scandir(path) as scanned:
            for child in scanned:
                entries.append(_entry_from_dir_entry(child))
    except OSError as exc:
        raise ListingError.from_os_error(path, exc) from exc
    return tuple(entries)


def load_directory(request: LoadDirectory) -> DirectoryLoaded:
    """Execute a load request and package the outcome as a result event."""
    try:
        entries = read_directory(request.path)
    except ListingError as exc:
        logger.info("listing %s failed: %s", request.path, exc)
        return DirectoryLoaded(request=request, error=exc)
    logger.debug("listed %s (%d entries)", request.path, len(entries))
    return DirectoryLoaded(request=request, entries=entries)


__all__ = [
    "read_directory",
    "load_directory",
]
