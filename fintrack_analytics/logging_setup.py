"""Logging for the ``fintrack_analytics`` package.

Library modules obtain loggers with ``get_logger(__name__)`` and never attach
handlers. The CLI (or a host application) calls ``configure_logging`` once to
route package records to a stream; until then records go to a
``NullHandler``. Skipped input records are reported at WARNING, cache
traffic at DEBUG.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

PACKAGE_LOGGER = "fintrack_analytics"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class _PackageHandler(logging.StreamHandler):
    """Marker type so repeated configuration can find the installed handler."""


def resolve_level(level: int | str | None) -> int:
    """Turn a level name, number or ``None`` into a ``logging`` level.

    ``None`` falls back to ``Settings.log_level`` (``FINTRACK_LOG_LEVEL``).
    Unknown names resolve to ``INFO``.
    """

    if level is None:
        from .config import get_settings

        level = get_settings().log_level
    if isinstance(level, int):
        return level
    name = str(level).strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelName(name)
    return numeric if isinstance(numeric, int) else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Attach one stream handler to the package logger.

    Calling it again only adjusts the level of the handler installed first.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    numeric = resolve_level(level)
    existing = [h for h in logger.handlers if isinstance(h, _PackageHandler)]
    if existing:
        logger.setLevel(numeric)
        existing[0].setLevel(numeric)
        return logger

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = _PackageHandler(stream or sys.stderr)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    logger.setLevel(numeric)
    logger.addHandler(handler)
    # Records would otherwise be printed twice by a configured root logger.
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for module ``name`` inside the package hierarchy."""

    package = logging.getLogger(PACKAGE_LOGGER)
    if not package.handlers:
        package.addHandler(logging.NullHandler())
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name.rsplit('.', 1)[-1]}"
    return logging.getLogger(name)
