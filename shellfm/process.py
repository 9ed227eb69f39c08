"""External process execution with combined output capture.

``run_process`` is the raw primitive; ``run_command`` turns a ``RunCommand``
effect into a ``CommandFinished`` event. Failures are returned, not raised.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .effects import RunCommand
from .errors import CommandError, LaunchError, NonZeroExit
from .events import CommandFinished

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessOutput:
    output: bytes
    returncode: int | None
    launch_error: OSError | None = None


def run_process(command: str, args: Sequence[str], cwd: Path) -> ProcessOutput:
    """Run ``command`` with ``args`` in ``cwd`` and capture stdout+stderr.

    stdin is the null device so the child cannot read the raw-mode terminal.
    ``returncode`` is ``None`` when the process could not be started.
    """
    try:
        completed = subprocess.run(
            [command, *args],
            cwd=str(cwd),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
    except OSError as exc:
        return ProcessOutput(output=b"", returncode=None, launch_error=exc)
    return ProcessOutput(output=completed.stdout or b"", returncode=completed.returncode)


def run_command(
    request: RunCommand,
    runner=run_process,
) -> CommandFinished:
    """Execute ``request`` and classify the outcome."""
    logger.info("running %s %s in %s", request.command, list(request.args), request.cwd)
    result = runner(request.command, request.args, request.cwd)
    output = result.output.decode("utf-8", errors="replace")

    error: CommandError | None = None
    if result.launch_error is not None:
        error = LaunchError(request.command, result.launch_error)
    elif result.returncode:
        error = NonZeroExit(request.command, result.returncode)

    if error is not None:
        logger.info("command %s failed: %s", request.command, error)
    return CommandFinished(request=request, output=output, error=error)


__all__ = [
    "ProcessOutput",
    "run_process",
    "run_command",
]
