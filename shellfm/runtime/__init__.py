"""Public runtime orchestration entry points.

This package groups the interactive session bootstrap (``run_app``) and the
lower-level event loop contracts used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import ExitReason, RuntimeLoopDeps, RuntimeLoopTiming


def run_app(*args, **kwargs):
    """Lazily import the session entrypoint to avoid terminal imports on package import."""
    from .app import run_app as _run_app

    return _run_app(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name in {"ExitReason", "RuntimeLoopDeps", "RuntimeLoopTiming"}:
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_app",
    "run_main_loop",
    "ExitReason",
    "RuntimeLoopDeps",
    "RuntimeLoopTiming",
]
