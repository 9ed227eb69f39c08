"""ANSI frame writer for the single-viewport browser.

Composes a full-screen frame from a ``RenderModel`` and writes it in one
``os.write`` call. Non-list rows match ``viewport.reserved_rows_for``.
"""

from __future__ import annotations

import os
import sys

from ..ansi import fit_text, sanitize_terminal_text
from ..state import Mode
from ..ui_theme import UITheme
from ..viewport import reserved_rows_for, visible_rows_for
from .model import SORT_LEGEND, RenderModel

STATUS_ROWS = 3
DIR_ICON = "📁"
FILE_ICON = "📄"
LOADING_SUFFIX = " (loading...)"


def _styled(style: str, text: str, theme: UITheme) -> str:
    if not style:
        return text
    return f"{style}{text}{theme.reset}"


def _status_lines(message: str) -> list[str]:
    lines = sanitize_terminal_text(message).splitlines()
    if len(lines) > STATUS_ROWS:
        hidden = len(lines) - STATUS_ROWS + 1
        lines = lines[: STATUS_ROWS - 1] + [f"... ({hidden} more lines)"]
    return lines + [""] * (STATUS_ROWS - len(lines))


def _scroll_hint(model: RenderModel) -> str:
    hints: list[str] = []
    if model.has_more_above:
        hints.append("↑ more files above")
    if model.has_more_below:
        hints.append("↓ more files below")
    if not hints:
        return ""
    return "... " + " | ".join(hints) + " ..."


def render_frame_lines(model: RenderModel, width: int, height: int, theme: UITheme) -> list[str]:
    """Return exactly ``height`` styled rows for ``model``."""
    width = max(1, width)
    list_rows = visible_rows_for(height, reserved_rows_for(model.mode))
    out: list[str] = []

    title_style = theme.search_title if model.mode is Mode.SEARCH else theme.title
    out.append(_styled(title_style, fit_text(f" {model.title} ", width), theme))
    directory = f"Directory: {sanitize_terminal_text(model.current_path)}"
    if model.loading:
        directory += LOADING_SUFFIX
    out.append(_styled(theme.directory, fit_text(directory, width), theme))

    if model.mode is Mode.SEARCH:
        prompt = f"Search: {sanitize_terminal_text(model.search_token)}_"
        out.append(_styled(theme.search_prompt, fit_text(prompt, width), theme))
        legend = f"Sort: {model.sort_key.value} ({SORT_LEGEND})"
        out.append(_styled(theme.sort_legend, fit_text(legend, width), theme))

    body: list[str] = []
    if model.empty_message:
        body.append(fit_text(model.empty_message, width))
    for row in model.rows:
        marker = ">" if row.selected else " "
        icon = DIR_ICON if row.is_dir else FILE_ICON
        text = fit_text(f"{marker} {icon} {sanitize_terminal_text(row.name)}", width)
        if row.selected:
            style = theme.row_selected
        else:
            style = theme.row_dir if row.is_dir else theme.row_file
        body.append(_styled(style, text, theme))
    body = body[:list_rows]
    body.extend(fit_text("", width) for _ in range(list_rows - len(body)))
    out.extend(body)

    out.append(_styled(theme.scroll_hint, fit_text(_scroll_hint(model), width), theme))

    status_style = theme.status_error if model.status_message.startswith("Error") else theme.status
    for line in _status_lines(model.status_message):
        out.append(_styled(status_style, fit_text(line, width), theme) if line else fit_text("", width))

    out.append(_styled(theme.prompt, fit_text(sanitize_terminal_text(model.command_line), width), theme))
    out.append(_styled(theme.help_dim, fit_text(model.help_line, width), theme))
    return out[:height]


def render_frame(model: RenderModel, width: int, height: int, theme: UITheme) -> str:
    """Compose one full-screen frame including cursor-home and clear codes."""
    return "\033[H\033[J" + "\r\n".join(render_frame_lines(model, width, height, theme))


def write_frame(frame: str) -> None:
    os.write(sys.stdout.fileno(), frame.encode("utf-8", errors="replace"))


__all__ = [
    "STATUS_ROWS",
    "render_frame_lines",
    "render_frame",
    "write_frame",
]
