"""
Structured logging for docker-alertd.

Console output is rendered either as JSON lines or as plain key=value text.
Notifiers and the dispatcher log through structlog so the success lines
("alert email sent", "sent alert to slack", "sent alert to pushover") stay
greppable in both formats.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog

from docker_alertd.config import get_config

if TYPE_CHECKING:
    from structlog.types import Processor


def _add_service_info(
    _logger: logging.Logger, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Add service metadata to each log entry."""
    event_dict["service"] = "docker-alertd"
    event_dict["pid"] = os.getpid()
    return event_dict


def setup_logging(
    level: str | None = None,
    format: str | None = None,
    stream: Any = None,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format: Log format (json, plain). Defaults to config value.
        stream: Output stream. Defaults to stdout.
    """
    config = get_config()

    level = level or config.logging.level
    format = format or config.logging.format

    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if format.lower() == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
        shared_processors = [*shared_processors, _add_service_info]
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=False,
            exception_formatter=structlog.dev.plain_traceback,
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)
    handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level)


def get_logger(name: str | None = None) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables to all subsequent log messages in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def with_context(**kwargs: Any) -> Iterator[None]:
    """
    Context manager for temporary context binding.

    Example:
        with with_context(container="web-1"):
            dispatcher.dispatch(alert)
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
