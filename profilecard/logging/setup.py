"""Structlog configuration for profilecard."""

import logging
import sys
from typing import TextIO

import structlog

from profilecard.config import CardConfig, LogFormat


def configure_logging(
    config: CardConfig | None = None,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structlog with appropriate processors and output format.

    Log lines go to stderr by default so that the CLI summary on stdout
    stays readable when piped.

    Args:
        config: CardConfig instance, uses defaults if None
        stream: Destination for log lines, stderr if None
    """
    if config is None:
        config = CardConfig()

    log_level = getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stderr,
        level=log_level,
    )

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if config.log_format == LogFormat.JSON:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ])
    else:
        processors.extend([
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=(stream or sys.stderr).isatty()),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=_print_logger_factory(stream),
        cache_logger_on_first_use=False,
    )


def _print_logger_factory(stream: TextIO | None):
    """Build PrintLoggers, looking up sys.stderr per logger when no stream is fixed."""

    def factory(*args) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=stream or sys.stderr)

    return factory


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """
    Get a configured structlog logger.

    Args:
        name: Optional logger name for context

    Returns:
        Configured structlog BoundLogger
    """
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger_name=name)
    return logger


def bind_handle(handle: str) -> None:
    """Attach the profile handle to every log line of the current context."""
    structlog.contextvars.bind_contextvars(handle=handle)


def clear_context() -> None:
    """Drop all context-local log fields."""
    structlog.contextvars.clear_contextvars()
