"""Logging configuration for the mortgage calculator.

Modules obtain their logger through ``get_logger(__name__)``. Nothing is
printed until an entry point (the CLI or the web app) calls
``configure_logging``; the level comes from the argument, the
``MORTGAGE_CALC_LOG_LEVEL`` environment variable, or ``WARNING``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ENV_LOG_LEVEL = "MORTGAGE_CALC_LOG_LEVEL"

PACKAGE_LOGGER = "mortgage_calc"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (typically ``__name__``)."""
    return logging.getLogger(name)


def _resolve_level(level: Optional[str]) -> int:
    level_str = level or os.getenv(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL
    return getattr(logging, level_str.upper(), logging.WARNING)


def configure_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling this again replaces the previous handler, so entry points may call
    it unconditionally.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    log_level = _resolve_level(level)
    logger.setLevel(log_level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
    logger.addHandler(handler)
    return logger
