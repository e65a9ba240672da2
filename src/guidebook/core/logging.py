"""
Guidebook Logging - structured logging via structlog.

Manifesto:
    Lint runs are short, but when a corpus has hundreds of documents it
    matters which file a rule choked on. Every module logs dotted event
    names with key-value context:

    - **Structured:** ``logger.info("loader.loaded", path=..., documents=12)``
    - **Flexible:** Coloured console output on a TTY, JSON otherwise
    - **Scoped:** ``LogContext`` binds context (content root, rule) for a block

Architecture:
    ::

        configure_logging(level="INFO", json_format=None)
            │
            ▼
        structlog processor chain:
          1. filter_by_level
          2. TimeStamper(iso)
          3. merge_contextvars
          4. add_log_level / add_logger_name
          5. _add_service_metadata
          6. JSONRenderer (or ConsoleRenderer for a TTY)
            │
            ▼
        stdlib logging (LoggerFactory) → StreamHandler(stderr)

    Log output goes to stderr. Stdout belongs to command output
    (tables, ``--json`` payloads).

Examples:
    >>> from guidebook.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.debug("corpus.scan", directory="content", pattern="**/*.md")

Tags:
    logging, structlog, observability, guidebook
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_SERVICE_NAME = "guidebook"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service", _SERVICE_NAME)
    return event_dict


def _level_number(level: str) -> int:
    name = level.upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level!r}. Use one of {', '.join(LOG_LEVELS)}")
    return getattr(logging, name)


def configure_logging(
    level: str = "WARNING",
    json_format: bool | None = None,
    service: str = "guidebook",
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs

    Raises:
        ValueError: If ``level`` is not a known log level.
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    level_no = _level_number(level)

    if json_format is None:
        json_format = not sys.stderr.isatty()

    shared_processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(1, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # Rendered events go through a stdlib handler on stderr
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level_no,
        force=True,
    )
    logging.getLogger("guidebook").setLevel(level_no)


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(content_root="content"):
            logger.info("lint.started")
        # content_root unbound here
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args: Any) -> None:
        unbind_context(*self._context.keys())


__all__ = [
    "LOG_LEVELS",
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
