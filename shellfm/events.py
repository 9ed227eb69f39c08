"""Events consumed by the navigation controller."""

from __future__ import annotations

from dataclasses import dataclass

from .effects import LoadDirectory, RunCommand
from .entries import Snapshot
from .errors import CommandError, ListingError


@dataclass(frozen=True)
class KeyPressed:
    """One normalized key token from the input decoder (``UP``, ``a``, ...)."""

    key: str


@dataclass(frozen=True)
class DirectoryLoaded:
    """Result of a ``LoadDirectory`` effect: entries on success, else ``error``."""

    request: LoadDirectory
    entries: Snapshot = ()
    error: ListingError | None = None


@dataclass(frozen=True)
class CommandFinished:
    """Result of a ``RunCommand`` effect with decoded combined output."""

    request: RunCommand
    output: str = ""
    error: CommandError | None = None


@dataclass(frozen=True)
class Resized:
    """Terminal height changed to ``rows``."""

    rows: int


Event = KeyPressed | DirectoryLoaded | CommandFinished | Resized


__all__ = [
    "Event",
    "KeyPressed",
    "DirectoryLoaded",
    "CommandFinished",
    "Resized",
]
