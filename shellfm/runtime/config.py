"""Runtime settings resolved from CLI flags and environment variables.

Nothing is persisted: settings live for one process. Default file locations
come from ``platformdirs``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_log_dir

from ..commands import DEFAULT_OUTPUT_LIMIT
from ..sorting import SortKey, parse_sort_key
from ..ui_theme import normalize_theme_name

APP_NAME = "shellfm"
LOG_FILENAME = "shellfm.log"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

ENV_THEME = "SHELLFM_THEME"
ENV_LOG_FILE = "SHELLFM_LOG_FILE"
ENV_LOG_LEVEL = "SHELLFM_LOG_LEVEL"
ENV_NO_COLOR = "NO_COLOR"
ENV_SORT = "SHELLFM_SORT"


@dataclass(frozen=True)
class RuntimeSettings:
    theme: str = "default"
    no_color: bool = False
    log_file: Path = DEFAULT_LOG_PATH
    log_level: str = DEFAULT_LOG_LEVEL
    output_limit: int = DEFAULT_OUTPUT_LIMIT
    sort_key: SortKey = SortKey.NAME


def _normalize_log_level(value: str | None) -> str:
    """Return an upper-cased known level name, falling back to the default."""
    if not value:
        return DEFAULT_LOG_LEVEL
    candidate = value.strip().upper()
    return candidate if candidate in LOG_LEVELS else DEFAULT_LOG_LEVEL


def resolve_settings(
    *,
    theme: str | None = None,
    no_color: bool = False,
    log_file: str | None = None,
    log_level: str | None = None,
    output_limit: int | None = None,
    sort: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> RuntimeSettings:
    """Merge explicit values over environment variables over defaults.

    ``NO_COLOR`` disables color when set to any non-empty value. An unknown
    sort name falls back to name order.
    """
    env = os.environ if environ is None else environ
    raw_log_file = log_file or env.get(ENV_LOG_FILE, "").strip()
    return RuntimeSettings(
        theme=normalize_theme_name(theme or env.get(ENV_THEME)),
        no_color=no_color or bool(env.get(ENV_NO_COLOR)),
        log_file=Path(raw_log_file).expanduser() if raw_log_file else DEFAULT_LOG_PATH,
        log_level=_normalize_log_level(log_level or env.get(ENV_LOG_LEVEL)),
        output_limit=output_limit if output_limit is not None else DEFAULT_OUTPUT_LIMIT,
        sort_key=parse_sort_key(sort or env.get(ENV_SORT, "")) or SortKey.NAME,
    )


__all__ = [
    "APP_NAME",
    "DEFAULT_LOG_PATH",
    "DEFAULT_LOG_LEVEL",
    "LOG_LEVELS",
    "RuntimeSettings",
    "resolve_settings",
]
