"""Structured logging configuration.

This module initializes structlog with a stable JSON line format on stderr.
Codec modules log through ``get_logger(__name__)`` with keyword fields.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV
from core.errors import TreeFsConfigError

_CONFIGURED_LEVEL: int | None = None


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog bound logger with structured output.
    """
    if _CONFIGURED_LEVEL is None:
        configure_logging(os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL))
    return structlog.get_logger(name)


def configure_logging(level_name: str) -> None:
    """Configure structlog processors and the minimum emitted level.

    Args:
        level_name: Standard level name such as 'info' or 'warning'.

    Raises:
        TreeFsConfigError: If the level name is unknown.
    """
    global _CONFIGURED_LEVEL
    level = parse_log_level(level_name)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    _CONFIGURED_LEVEL = level


def parse_log_level(level_name: str) -> int:
    """Resolve a level name into a numeric logging level.

    Args:
        level_name: Case-insensitive level name.

    Returns:
        Numeric level from the logging module.

    Raises:
        TreeFsConfigError: If the level name is unknown.
    """
    level = logging.getLevelName(level_name.strip().upper())
    if not isinstance(level, int):
        raise TreeFsConfigError(
            f"Invalid {LOG_LEVEL_ENV} value: expected a level such as 'info' or "
            f"'warning', got '{level_name}'."
        )
    return level
