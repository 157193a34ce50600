"""Logging utilities for the application.

This module provides a configured structlog logger for consistent logging across the application.
"""

import logging
import sys

import structlog
from structlog.stdlib import BoundLogger

from simple_explain.config import settings

_configured = False


def configure_logger(level: str | None = None, environment: str | None = None) -> None:
    """Configure structlog processors and the minimum log level.

    The processor chain is:
    - Context variables merging
    - Log level addition
    - Stack info rendering
    - Exception info
    - ISO timestamp format
    - Console rendering for local development, JSON everywhere else

    Args:
        level: Minimum level name, defaults to ``settings.LOG_LEVEL``
        environment: Environment name, defaults to ``settings.ENVIRONMENT``
    """
    global _configured

    level_name = (level or settings.LOG_LEVEL).upper()
    environment = environment or settings.ENVIRONMENT

    renderer = (
        structlog.dev.ConsoleRenderer(colors=False)
        if environment == "local"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level_name)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> BoundLogger:
    """Get a configured structlog logger.

    Args:
        name: The name of the logger, typically __name__

    Returns:
        A configured structlog BoundLogger instance
    """
    if not _configured:
        configure_logger()
    return structlog.get_logger(name)
