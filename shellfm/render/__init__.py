"""Rendering for the browser view.

``build_render_model`` is the pure state projection; ``render_frame`` turns a
model into ANSI text and ``write_frame`` puts it on the terminal.
"""

from __future__ import annotations

from .frame import STATUS_ROWS, render_frame, render_frame_lines, write_frame
from .model import RenderModel, RenderRow, build_render_model

__all__ = [
    "RenderModel",
    "RenderRow",
    "build_render_model",
    "STATUS_ROWS",
    "render_frame",
    "render_frame_lines",
    "write_frame",
]
