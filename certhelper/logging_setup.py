"""
Logging setup for applications embedding certhelper.

The library modules only log through ``logging.getLogger(__name__)`` at DEBUG
level; nothing is printed unless the host application configures logging.
"""
from __future__ import annotations

import logging

import structlog

from certhelper.config import settings


def configure_logging(level: str | None = None) -> None:
    """Configure structlog and stdlib logging with a console renderer."""
    level_name = (level or settings.LOG_LEVEL).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level_name!r}")

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
