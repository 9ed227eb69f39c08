"""Side-effect requests returned by controller transitions.

Effects are plain data. The runtime decides when and where they execute;
the controller never performs I/O itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class LoadDirectory:
    """Read ``path`` and post a ``DirectoryLoaded`` event.

    ``request_id`` tags the request so results for superseded loads can be
    discarded. ``return_name`` is the child to place the cursor on once the
    listing arrives (empty for none).
    """

    request_id: int
    path: Path
    return_name: str = ""


@dataclass(frozen=True)
class RunCommand:
    """Run an external command in ``cwd`` and post a ``CommandFinished`` event."""

    command_id: int
    command: str
    args: tuple[str, ...]
    cwd: Path


@dataclass(frozen=True)
class Quit:
    """Terminate the interactive loop normally."""

    interrupted: bool = False


Effect = LoadDirectory | RunCommand | Quit


__all__ = [
    "Effect",
    "LoadDirectory",
    "RunCommand",
    "Quit",
]
