"""Runtime composition layer for shellfm.

Reads the starting directory, builds the initial state, wires the reducer,
renderer, terminal, and effect runner together, and runs the loop.
"""

from __future__ import annotations

import logging
import shutil
import sys
from functools import partial
from pathlib import Path

from ..controller import initial_state, update
from ..errors import ListingError, StartupError
from ..listing import read_directory
from ..render import RenderModel, render_frame, write_frame
from ..sorting import SortKey
from ..state import NavigationState
from ..ui_theme import resolve_theme
from .config import RuntimeSettings
from .effects import EffectRunner
from .loop import ExitReason, RuntimeLoopDeps, run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def load_initial_state(path: Path, terminal_rows: int, sort_key: SortKey = SortKey.NAME) -> NavigationState:
    """Read ``path`` synchronously and build the startup state.

    Raises ``StartupError`` when the directory cannot be listed.
    """
    try:
        entries = read_directory(path)
    except ListingError as exc:
        raise StartupError(str(exc)) from exc
    return initial_state(path, entries, terminal_rows=terminal_rows, sort_key=sort_key)


def run_app(path: Path, settings: RuntimeSettings) -> ExitReason:
    """Run one interactive session rooted at ``path``."""
    term = shutil.get_terminal_size((80, 24))
    state = load_initial_state(path, term.lines, settings.sort_key)
    terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
    theme = resolve_theme(settings.theme, no_color=settings.no_color)

    def draw(model: RenderModel, columns: int, rows: int) -> None:
        write_frame(render_frame(model, columns, rows, theme))

    deps = RuntimeLoopDeps(
        draw=draw,
        reducer=partial(update, output_limit=settings.output_limit),
    )
    reason, _final_state = run_main_loop(
        state,
        terminal,
        sys.stdin.fileno(),
        EffectRunner(),
        deps,
    )
    return reason


__all__ = [
    "load_initial_state",
    "run_app",
]
