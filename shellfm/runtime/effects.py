"""One-shot background execution of controller effects.

Each load or command effect gets its own short-lived daemon thread. Results
are queued and drained by the main loop between key reads; the loop never
blocks on an outstanding effect and nothing cancels one.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from queue import Empty, Queue

from ..effects import LoadDirectory, RunCommand
from ..errors import CommandError, ListingError, ListingErrorKind
from ..events import CommandFinished, DirectoryLoaded, Event
from ..listing import load_directory
from ..process import run_command

logger = logging.getLogger(__name__)


class EffectRunner:
    """Run ``LoadDirectory``/``RunCommand`` effects off the loop thread."""

    def __init__(
        self,
        load: Callable[[LoadDirectory], DirectoryLoaded] = load_directory,
        run: Callable[[RunCommand], CommandFinished] = run_command,
    ) -> None:
        self._load = load
        self._run = run
        self._results: Queue[Event] = Queue()
        self._lock = threading.Lock()
        self._outstanding = 0

    @property
    def outstanding(self) -> int:
        with self._lock:
            return self._outstanding

    def _execute(self, effect: LoadDirectory | RunCommand) -> Event:
        try:
            if isinstance(effect, LoadDirectory):
                return self._load(effect)
            return self._run(effect)
        except Exception as exc:
            logger.exception("effect %r failed unexpectedly", effect)
            if isinstance(effect, LoadDirectory):
                error = ListingError(ListingErrorKind.OTHER, effect.path, str(exc))
                return DirectoryLoaded(request=effect, error=error)
            return CommandFinished(request=effect, error=CommandError(effect.command, str(exc)))

    def _worker(self, effect: LoadDirectory | RunCommand) -> None:
        try:
            self._results.put(self._execute(effect))
        finally:
            with self._lock:
                self._outstanding -= 1

    def submit(self, effect: LoadDirectory | RunCommand) -> None:
        """Start ``effect`` on a new daemon thread."""
        if not isinstance(effect, (LoadDirectory, RunCommand)):
            raise TypeError(f"effect cannot run in background: {effect!r}")
        with self._lock:
            self._outstanding += 1
        logger.debug("submitting %r", effect)
        worker = threading.Thread(
            target=self._worker,
            args=(effect,),
            name=f"shellfm-{type(effect).__name__}",
            daemon=True,
        )
        worker.start()

    def drain_results(self) -> list[Event]:
        """Drain all completed effect results in completion order."""
        out: list[Event] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out


__all__ = ["EffectRunner"]
