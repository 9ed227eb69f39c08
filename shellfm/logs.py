"""Logging setup for the interactive session.

The terminal belongs to the UI while the loop runs, so records go to a file
rather than stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "shellfm"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(log_file: Path, level: str = "WARNING") -> logging.Logger:
    """Attach a file handler for ``log_file`` to the package logger.

    Repeated calls replace the previously installed handler. When the log
    directory cannot be created, records are dropped instead.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler: logging.Handler
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()

    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False
    return logger


__all__ = [
    "LOGGER_NAME",
    "LOG_FORMAT",
    "configure_logging",
]
