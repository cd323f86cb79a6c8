"""Structured logging configuration for Reviewpool.

This module configures structlog with support for:
- JSON and console output formats
- File rotation based on size
- Correlation IDs propagated from HTTP requests
- Operation context binding for engine calls

structlog is layered over Python's stdlib logging: stdlib provides the
handlers (stdout or a rotating file) and structlog's ProcessorFormatter
renders every record, structlog's own and foreign stdlib ones alike.

Example usage:
    >>> from reviewpool.config import LoggingConfig
    >>> from reviewpool.logging import setup_logging, get_logger, operation_context
    >>>
    >>> setup_logging(LoggingConfig(level="INFO", format="json"))
    >>> logger = get_logger(__name__)
    >>> with operation_context("create_pull_request", pull_request_id="pr-1"):
    ...     logger.info("pull_request_created", reviewer_count=2)
"""

from __future__ import annotations

import contextvars
import logging
import logging.handlers
import sys
from contextlib import AbstractContextManager
from typing import Any

import structlog

from reviewpool.config import LoggingConfig

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)


def add_correlation_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add correlation_id to log event if set in context.

    Args:
        logger: Logger instance (unused, required by structlog protocol)
        method_name: Log method name (unused, required by structlog protocol)
        event_dict: Current event dictionary to augment

    Returns:
        Event dictionary with correlation_id added if available
    """
    correlation_id = _correlation_id.get()
    if correlation_id is not None:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def set_correlation_id(correlation_id: str | None) -> None:
    """Set correlation ID for current context.

    Args:
        correlation_id: Correlation ID string or None to clear
    """
    _correlation_id.set(correlation_id)


def get_correlation_id() -> str | None:
    """Get current correlation ID from context."""
    return _correlation_id.get()


def operation_context(operation: str, **identifiers: str) -> AbstractContextManager[None]:
    """Bind the running engine operation to logs emitted inside the block.

    Values are bound through structlog's contextvars, so they stay scoped
    to the current asyncio task and are removed when the block exits.

    Args:
        operation: Engine operation name (e.g. ``"reassign_reviewer"``)
        **identifiers: Entity identifiers involved (team_name, pull_request_id, ...)

    Returns:
        Context manager restoring the previous bindings on exit.
    """
    return structlog.contextvars.bound_contextvars(operation=operation, **identifiers)


def setup_logging(config: LoggingConfig) -> None:
    """Configure structlog with the given configuration.

    Sets up the full pipeline: JSON or console rendering, optional file
    rotation, timestamp/level/logger-name processors and the correlation
    ID processor. Rendering happens in a ``ProcessorFormatter`` on the
    stdlib handler, so every record (including stdlib loggers such as
    uvicorn's and tracebacks) comes out as exactly one rendered entry.

    Args:
        config: Logging configuration from ReviewpoolConfig
    """
    log_level = getattr(logging, config.level)

    shared_processors: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.contextvars.merge_contextvars,
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
    ]

    render_processors: list[Any] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if config.format == "json":
        render_processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        render_processors.append(structlog.dev.ConsoleRenderer())

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=render_processors,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler: logging.Handler
    if config.file is not None:
        config.file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            filename=config.file,
            maxBytes=config.rotation_size_mb * 1024 * 1024,
            backupCount=config.retention_count,
            encoding="utf-8",
        )
    else:
        handler = logging.StreamHandler(sys.stdout)

    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Configured structlog BoundLogger instance
    """
    return structlog.get_logger(name)
