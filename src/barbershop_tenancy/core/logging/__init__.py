"""Structured logging setup."""

import logging

import structlog

from barbershop_tenancy.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog for the library and its CLI.

    Production environments render JSON lines; everything else uses
    the console renderer. Loggers are only cached in production, so
    outside it every call writes to whatever ``sys.stdout`` is current.

    Args:
        settings: Settings providing environment and log level
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.processors.JSONRenderer()
                if settings.is_production
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=settings.is_production,
    )


__all__ = [
    "configure_logging",
]
