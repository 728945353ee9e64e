"""
Structured logging configuration using structlog.

This module configures structured logging with contextvars support for
interaction-scoped logging context.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.contextvars import clear_contextvars, merge_contextvars


def configure_logging(
    log_level: str | None = None,
    log_format: str = "json",
) -> None:
    """
    Configure structlog with processors and formatters.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format type (json or text)
    """
    level = log_level or "INFO"

    # discord.py logs through the standard library
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
        force=True,
    )

    processors: list[Any] = [
        # Must be first
        merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Colours only when attached to a terminal
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(), exception_formatter=structlog.dev.plain_traceback
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
        context_class=dict,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__ of the module)

    Returns:
        Configured bound logger
    """
    return structlog.get_logger(name)


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    app_version: str = "unknown",
    app_env: str = "unknown",
    debug: bool = False,
) -> structlog.stdlib.BoundLogger:
    """
    Setup logging and return the main logger.

    This should be called at application startup.

    Returns:
        Configured logger instance
    """
    # Debug mode upgrades INFO to DEBUG
    if debug and log_level.upper() == "INFO":
        log_level = "DEBUG"

    configure_logging(log_level=log_level, log_format=log_format)
    log = get_logger("scoreboard_bot")

    log.info(
        "scoreboard_bot_starting",
        app_version=app_version,
        app_env=app_env,
        debug=debug,
    )

    return log


def clear_request_context() -> None:
    """Clear all interaction context variables."""
    clear_contextvars()


__all__ = [
    "configure_logging",
    "get_logger",
    "setup_logging",
    "clear_request_context",
]
