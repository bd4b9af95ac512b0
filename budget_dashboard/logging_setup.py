"""Logging for the ``budget_dashboard`` package.

Library modules ask for ``get_logger(__name__)`` and never add handlers.
The Streamlit entry point calls ``configure_logging()``; Streamlit reruns
the script on every interaction, so configuring twice must be harmless.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional, Union

from . import config

PACKAGE_LOGGER = "budget_dashboard"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class _DashboardHandler(logging.StreamHandler):
    """Marks the one handler ``configure_logging`` owns."""


def resolve_level(level: Union[int, str, None]) -> int:
    """Map ``level`` (or ``BUDGET_DASHBOARD_LOG_LEVEL`` when None) to a number.

    Unknown names resolve to INFO.

    Example:
        >>> resolve_level("debug")
        10
    """
    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, int):
        return level
    if not level:
        return logging.INFO
    text = str(level).strip().upper()
    if text.isdigit():
        return int(text)
    numeric = logging.getLevelName(text)
    return numeric if isinstance(numeric, int) else logging.INFO


def configure_logging(
    level: Union[int, str, None] = None,
    *,
    stream: Optional[IO[str]] = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Send package records to ``stream`` (stderr by default).

    Calling again replaces the previous handler instead of stacking another,
    so the level and stream of the latest call win.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, (_DashboardHandler, logging.NullHandler)):
            logger.removeHandler(handler)

    handler = _DashboardHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a package module; silent until ``configure_logging`` runs."""
    package = logging.getLogger(PACKAGE_LOGGER)
    if not package.handlers:
        package.addHandler(logging.NullHandler())
    return logging.getLogger(name)
