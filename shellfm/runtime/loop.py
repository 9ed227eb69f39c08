"""Main interactive event loop for the terminal UI.

Polls terminal size, drains effect results, renders when needed, and reads
one key at a time. Every event runs through the reducer to completion before
the next one is looked at. Feature logic lives in the controller.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from ..controller import Transition, update
from ..effects import Effect, Quit
from ..events import Event, KeyPressed, Resized
from ..input import read_key
from ..render import RenderModel, build_render_model
from ..state import NavigationState
from .effects import EffectRunner

logger = logging.getLogger(__name__)


class ExitReason(Enum):
    QUIT = "quit"
    INTERRUPT = "interrupt"


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_poll_ms: int = 50


@dataclass(frozen=True)
class RuntimeLoopDeps:
    """Injected operations used by ``run_main_loop``.

    Defaults talk to the real terminal; tests swap in fakes.
    """

    draw: Callable[[RenderModel, int, int], None]
    reducer: Callable[[NavigationState, Event], Transition] = update
    read_key: Callable[[int, int | None], str] = read_key
    terminal_size: Callable[[], os.terminal_size] = lambda: shutil.get_terminal_size((80, 24))


def _launch_effects(effects: Iterable[Effect], runner: EffectRunner) -> Quit | None:
    """Submit background effects; return the first ``Quit`` if one is requested."""
    quit_effect: Quit | None = None
    for effect in effects:
        if isinstance(effect, Quit):
            if quit_effect is None:
                quit_effect = effect
            continue
        runner.submit(effect)
    return quit_effect


def run_main_loop(
    state: NavigationState,
    terminal,
    stdin_fd: int,
    runner: EffectRunner,
    deps: RuntimeLoopDeps,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
) -> tuple[ExitReason, NavigationState]:
    """Run until a ``Quit`` effect; return why and the final state."""
    logger.info("loop starting in %s", state.current_path)
    dirty = True
    last_columns = -1

    def apply(event: Event) -> Quit | None:
        nonlocal state, dirty
        next_state, effects = deps.reducer(state, event)
        if next_state is not state:
            dirty = True
        state = next_state
        return _launch_effects(effects, runner)

    quit_effect: Quit | None = None
    with terminal.raw_mode():
        while quit_effect is None:
            size = deps.terminal_size()
            if size.lines != state.terminal_rows:
                quit_effect = apply(Resized(size.lines))
            if size.columns != last_columns:
                last_columns = size.columns
                dirty = True

            for result in runner.drain_results():
                quit_effect = apply(result) or quit_effect
            if quit_effect is not None:
                break

            if dirty:
                deps.draw(build_render_model(state), size.columns, size.lines)
                dirty = False

            key = deps.read_key(stdin_fd, timing.key_poll_ms)
            if key:
                quit_effect = apply(KeyPressed(key))

    reason = ExitReason.INTERRUPT if quit_effect.interrupted else ExitReason.QUIT
    logger.info("loop finished (%s) in %s", reason.value, state.current_path)
    return reason, state


__all__ = [
    "ExitReason",
    "RuntimeLoopTiming",
    "RuntimeLoopDeps",
    "run_main_loop",
]
