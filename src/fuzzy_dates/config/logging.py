"""Structured logging configuration for the fuzzy date engine.

The resolver only emits diagnostics (fallbacks, rejected input, ignored
modifiers); the resolved date itself is the CLI's stdout. Every log line
therefore goes to stderr, so ``fuzzy-dates --json`` can be piped into a JSON
consumer without log records mixed into the payload.
"""

import logging
import sys
from typing import Literal

import structlog

from fuzzy_dates.config.settings import get_settings


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
) -> None:
    """Configure stdlib logging and structlog to write to stderr.

    Called once per ``cli.main`` invocation. ``force=True`` replaces any
    handlers from an earlier call, so repeated in-process invocations (tests,
    an embedding service) can switch level or format.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to the
            ``LOG_LEVEL`` value of FuzzyDateSettings.
        format: ``json`` for log shippers, ``console`` for a terminal.
            Defaults to the ``LOG_FORMAT`` value of FuzzyDateSettings.
    """
    settings = get_settings()
    log_level = level or settings.log_level
    log_format = format or settings.log_format

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level),
        force=True,
    )

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(
            # No ANSI codes when stderr is redirected to a file
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Bound logger instance.
    """
    return structlog.get_logger(name)
