"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any

import structlog

from ..config.settings import Settings, get_settings


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structured logging for the CLI.

    Logs go to stderr: stdout carries the export lines the calling shell evals.
    """
    settings = settings or get_settings()

    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level),
        force=True,
    )

    # Configure structlog
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if settings.structured_logging:
        processors.extend([
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer()
        ])
    else:
        processors.extend([
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        ])

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Keyring backends log through the standard library
    logging.getLogger("keyring").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_error(error: Exception, context: dict[str, Any] | None = None) -> None:
    """Log an error with context, without a traceback."""
    logger = get_logger("error")
    logger.debug(
        "Command failed",
        error_type=type(error).__name__,
        error_message=str(error),
        context=context or {},
    )
