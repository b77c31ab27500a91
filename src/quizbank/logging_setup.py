"""
Logging configuration.

The library logs through loguru's shared ``logger``. Applications call
configure_logging() once at startup to pick the level and format.
"""

from __future__ import annotations

import sys

from loguru import logger

from config import get_settings


def configure_logging(level: str | None = None) -> int:
    """
    Replace loguru's default sink with a stderr sink.

    When ``log_file`` is configured, a rotating file sink is added as well.

    Returns:
        Id of the stderr sink
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()

    logger.remove()
    sink_id = logger.add(
        sys.stderr,
        level=level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level=level, rotation="10 MB", encoding="utf-8")
    return sink_id
