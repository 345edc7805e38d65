"""Structured logging for the page analyzer.

JSON lines in production, coloured console output in development.  Only the
outer surfaces (API app factory, CLI) call :func:`configure_logging`; library
modules just ask for a logger::

    from pageanalyzer.logger import get_logger

    log = get_logger(__name__)
    log.info("page fetched", url=url, status_code=200)
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

import structlog

from pageanalyzer.config import settings

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "FATAL": logging.CRITICAL,
    "CRITICAL": logging.CRITICAL,
}

_configured = False


def resolve_level(name: str) -> int:
    """Map a ``LOG_LEVEL`` value to a stdlib level, defaulting to INFO."""
    return _LEVELS.get(name.strip().upper(), logging.INFO)


def configure_logging(force: bool = False, stream: Optional[IO[str]] = None) -> None:
    """Configure stdlib logging and structlog from ``settings``.

    Logs go to *stream*, stdout by default.

    Safe to call more than once; later calls are no-ops unless *force* is set.
    """
    global _configured
    if _configured and not force:
        return

    level = resolve_level(settings.log_level)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=stream or sys.stdout,
        force=force,
    )

    renderer = (
        structlog.dev.ConsoleRenderer(colors=True)
        if settings.is_development
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            # ConsoleRenderer formats exceptions itself
            *([] if settings.is_development else [structlog.processors.format_exc_info]),
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to *name*."""
    return structlog.get_logger(name)
