"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the frame writer: title bars, list rows, the
command prompt, and status text.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    title: str
    search_title: str
    directory: str
    row_dir: str
    row_file: str
    row_selected: str
    scroll_hint: str
    search_prompt: str
    sort_legend: str
    prompt: str
    status: str
    status_error: str
    help_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    title="\033[1;38;2;250;250;250;48;2;125;86;244m",
    search_title="\033[1;38;2;255;215;0;48;2;45;45;45m",
    directory="\033[38;5;252m",
    row_dir="\033[1;34m",
    row_file="\033[38;5;252m",
    row_selected="\033[38;2;238;111;248;48;2;98;98;98m",
    scroll_hint="\033[2;38;5;250m",
    search_prompt="\033[38;2;135;206;235;48;2;45;45;45m",
    sort_legend="\033[38;5;250m",
    prompt="\033[38;2;4;181;117;48;2;60;60;60m",
    status="\033[38;2;4;181;117m",
    status_error="\033[38;2;255;95;135m",
    help_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    title="\033[1;38;5;231;48;5;24m",
    search_title="\033[1;38;5;45;48;5;236m",
    directory="\033[38;5;153m",
    row_dir="\033[1;38;5;45m",
    row_file="\033[38;5;252m",
    row_selected="\033[38;5;231;48;5;31m",
    scroll_hint="\033[2;38;5;110m",
    search_prompt="\033[38;5;117;48;5;236m",
    sort_legend="\033[38;5;110m",
    prompt="\033[38;5;84;48;5;236m",
    status="\033[38;5;117m",
    status_error="\033[38;5;210m",
    help_dim="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    title="",
    search_title="",
    directory="",
    row_dir="",
    row_file="",
    row_selected="\033[7m",
    scroll_hint="",
    search_prompt="",
    sort_legend="",
    prompt="",
    status="",
    status_error="",
    help_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode.

    ``no_color`` keeps reverse video for the selected row so the cursor
    stays visible.
    """
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
