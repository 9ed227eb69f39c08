"""Command-line dispatch for the browse-mode input prompt.

``dispatch`` classifies one input line as a built-in or an external command
and returns the effect to run as data. ``describe_result`` and
``needs_refresh`` interpret a finished external command.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .effects import Effect, LoadDirectory, Quit, RunCommand
from .errors import LaunchError
from .events import CommandFinished

DEFAULT_OUTPUT_LIMIT = 500
TRUNCATED_SUFFIX = "\n... (output truncated)"
MUTATING_COMMANDS = frozenset({"touch", "mkdir", "rm", "rmdir", "cp", "mv"})


class CommandKind(Enum):
    NONE = "none"
    BUILTIN = "builtin"
    EXTERNAL = "external"


@dataclass(frozen=True)
class Dispatch:
    """Outcome of dispatching one input line.

    ``status_message`` is ``None`` when the status should stay unchanged.
    """

    kind: CommandKind
    effect: Effect | None = None
    status_message: str | None = None


def resolve_cd_target(arg: str | None, working_directory: Path) -> Path:
    """Resolve a ``cd`` argument against ``working_directory``.

    No argument means the home directory. ``~`` is expanded and ``..``
    segments are collapsed lexically.
    """
    if not arg:
        return Path.home()
    expanded = os.path.expanduser(arg)
    joined = os.path.join(str(working_directory), expanded)
    return Path(os.path.normpath(joined))


def dispatch(line: str, working_directory: Path, request_id: int = 0) -> Dispatch:
    """Classify ``line`` and build its effect.

    ``request_id`` tags the load or run effect so its result can be matched
    to this request later.
    """
    parts = line.split()
    if not parts:
        return Dispatch(CommandKind.NONE)

    command, args = parts[0], parts[1:]
    if command == "cd":
        target = resolve_cd_target(args[0] if args else None, working_directory)
        return Dispatch(CommandKind.BUILTIN, LoadDirectory(request_id, target))
    if command in ("ls", "dir"):
        return Dispatch(CommandKind.BUILTIN, LoadDirectory(request_id, working_directory))
    if command == "pwd":
        return Dispatch(CommandKind.BUILTIN, status_message=f"Current directory: {working_directory}")
    if command == "clear":
        return Dispatch(CommandKind.BUILTIN, status_message="")
    if command in ("quit", "exit"):
        return Dispatch(CommandKind.BUILTIN, Quit())

    return Dispatch(
        CommandKind.EXTERNAL,
        RunCommand(command_id=request_id, command=command, args=tuple(args), cwd=working_directory),
    )


def truncate_output(text: str, limit: int = DEFAULT_OUTPUT_LIMIT) -> str:
    """Cut ``text`` to ``limit`` characters, marking the cut explicitly."""
    if limit <= 0 or len(text) <= limit:
        return text
    return text[:limit] + TRUNCATED_SUFFIX


def describe_result(result: CommandFinished, limit: int = DEFAULT_OUTPUT_LIMIT) -> str:
    """Build the status message for a finished external command."""
    command = result.request.command
    if result.error is not None:
        return truncate_output(f"Error executing {command}: {result.error}\n{result.output}", limit)
    if not result.output.strip():
        return f"Command '{command}' executed successfully"
    return truncate_output(result.output, limit)


def needs_refresh(result: CommandFinished) -> bool:
    """Return whether the listing should reload after ``result``.

    Mutating commands reload even on a non-zero exit, since a partial
    failure may still have changed the directory. A command that never
    launched cannot have changed anything.
    """
    if result.request.command not in MUTATING_COMMANDS:
        return False
    return not isinstance(result.error, LaunchError)


__all__ = [
    "DEFAULT_OUTPUT_LIMIT",
    "TRUNCATED_SUFFIX",
    "MUTATING_COMMANDS",
    "CommandKind",
    "Dispatch",
    "resolve_cd_target",
    "dispatch",
    "truncate_output",
    "describe_result",
    "needs_refresh",
]
