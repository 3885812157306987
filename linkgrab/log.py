"""Structlog setup for the CLI: events go to stderr, stdout is left for output."""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(environment: str, log_level: str = "WARNING") -> None:
    """Route structlog events to stderr, dropping those below *log_level*.

    ``production`` renders one JSON object per line; anything else uses the
    console renderer.  Loggers are not cached, so a later call (or
    ``structlog.reset_defaults``) takes effect for module-level loggers too.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    if environment == "production":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
