"""
Structured logging setup.

Every module logs through ``structlog.get_logger(__name__)``; this module
only decides the level and renderer once, at application creation.
"""

import logging

import structlog

from core.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog processors for the current environment."""
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.LOG_JSON
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )


def mask_email(address: str | None) -> str | None:
    """Mask an email address for logs (``abc***``)."""
    if not address:
        return address
    return address[:3] + "***"
