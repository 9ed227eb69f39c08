"""Error taxonomy shared by the listing provider, command runner, and CLI.

Listing and command errors are returned as data and rendered as status text.
Only ``StartupError`` is meant to reach the process boundary.
"""

from __future__ import annotations

import errno
from enum import Enum
from pathlib import Path


class ShellfmError(Exception):
    """Base class for shellfm-specific errors."""


class ListingErrorKind(Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    NOT_A_DIRECTORY = "not_a_directory"
    OTHER = "other"


_KIND_LABELS = {
    ListingErrorKind.NOT_FOUND: "no such file or directory",
    ListingErrorKind.PERMISSION_DENIED: "permission denied",
    ListingErrorKind.NOT_A_DIRECTORY: "not a directory",
}


class ListingError(ShellfmError):
    """A directory could not be read."""

    def __init__(self, kind: ListingErrorKind, path: Path, detail: str = "") -> None:
        self.kind = kind
        self.path = path
        self.detail = detail
        super().__init__(self._describe())

    def _describe(self) -> str:
        label = _KIND_LABELS.get(self.kind, self.detail or "cannot read directory")
        return f"open {self.path}: {label}"

    @classmethod
    def from_os_error(cls, path: Path, exc: OSError) -> ListingError:
        """Classify an ``OSError`` raised while scanning ``path``."""
        if isinstance(exc, FileNotFoundError):
            kind = ListingErrorKind.NOT_FOUND
        elif isinstance(exc, PermissionError):
            kind = ListingErrorKind.PERMISSION_DENIED
        elif isinstance(exc, NotADirectoryError) or exc.errno == errno.ENOTDIR:
            kind = ListingErrorKind.NOT_A_DIRECTORY
        else:
            kind = ListingErrorKind.OTHER
        return cls(kind, path, exc.strerror or str(exc))


class CommandError(ShellfmError):
    """An external command did not complete successfully."""

    def __init__(self, command: str, message: str) -> None:
        self.command = command
        super().__init__(message)


class LaunchError(CommandError):
    """The command could not be started (missing, not executable, bad cwd)."""

    def __init__(self, command: str, exc: OSError) -> None:
        self.os_error = exc
        reason = exc.strerror or str(exc)
        super().__init__(command, f"exec: {command!r}: {reason.lower()}")


class NonZeroExit(CommandError):
    """The command ran and exited with a non-zero status."""

    def __init__(self, command: str, returncode: int) -> None:
        self.returncode = returncode
        if returncode < 0:
            message = f"signal: killed by signal {-returncode}"
        else:
            message = f"exit status {returncode}"
        super().__init__(command, message)


class StartupError(ShellfmError):
    """Fatal condition before the interactive loop could start."""


__all__ = [
    "ShellfmError",
    "ListingErrorKind",
    "ListingError",
    "CommandError",
    "LaunchError",
    "NonZeroExit",
    "StartupError",
]
