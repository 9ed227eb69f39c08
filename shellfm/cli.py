"""Command-line front door for shellfm.

Parses CLI options, resolves the starting directory and runtime settings,
configures logging, then hands over to the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .errors import StartupError
from .logs import configure_logging
from .runtime import run_app
from .runtime.config import LOG_LEVELS, resolve_settings
from .runtime.loop import ExitReason
from .sorting import SortKey, parse_sort_key
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _sort_name(value: str) -> str:
    """argparse type accepting a sort key name or its digit."""
    if parse_sort_key(value) is None:
        choices = ", ".join(key.value for key in SortKey)
        raise argparse.ArgumentTypeError(f"unknown sort key {value!r} (choose from {choices} or 1-4)")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shellfm",
        description="Browse directories and run shell commands in a terminal file manager.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Starting directory. Defaults to the current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colors.")
    parser.add_argument("--log-file", default=None, help="Write diagnostics to this file.")
    parser.add_argument("--log-level", default=None, choices=LOG_LEVELS, type=str.upper, help="Diagnostics level.")
    parser.add_argument(
        "--output-limit",
        type=_positive_int,
        default=None,
        help="Maximum characters of command output shown in the status area.",
    )
    parser.add_argument("--sort", type=_sort_name, default=None, help="Initial sort order (name, size, time, type).")
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> int:
    """Parse CLI arguments and run the browser; return the process exit status.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    settings = resolve_settings(
        theme=args.theme,
        no_color=args.no_color,
        log_file=args.log_file,
        log_level=args.log_level,
        output_limit=args.output_limit,
        sort=args.sort,
    )
    configure_logging(settings.log_file, settings.log_level)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path).expanduser() if args.path else default_path
    path = Path(os.path.abspath(path))

    try:
        reason = run_app(path, settings)
    except StartupError as exc:
        logger.error("startup failed: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    return EXIT_INTERRUPTED if reason is ExitReason.INTERRUPT else EXIT_OK


def entrypoint() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    entrypoint()
