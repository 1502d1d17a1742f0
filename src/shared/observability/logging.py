"""Structured logging for the fleet monitor.

Events are rendered as JSON in production and through the console renderer
in development. Every event carries the service name and environment. The
cluster call helpers log one event per cluster request, keyed by cluster
name and listing URL, with the request outcome and its duration.
"""

import logging
import sys
from datetime import datetime, timezone
from enum import Enum

import structlog
from structlog.types import EventDict, Processor

from shared.config import LogFormat, LogLevel, get_settings

QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add service context to log events."""
    settings = get_settings()
    event_dict.setdefault("service", settings.app_name)
    event_dict["environment"] = settings.environment.value
    return event_dict


def add_timestamp(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add ISO 8601 timestamp."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def setup_logging(
    service_name: str | None = None,
    log_level: LogLevel | None = None,
    log_format: LogFormat | None = None,
) -> None:
    """Configure structured logging for the application.

    Args:
        service_name: Bound to every event when given (defaults to settings.app_name)
        log_level: Override log level (defaults to settings.log_level)
        log_format: Override log format (defaults to settings.log_format)
    """
    settings = get_settings()
    level = LogLevel(_enum_value(log_level or settings.log_level).upper())
    fmt = LogFormat(_enum_value(log_format or settings.log_format).lower())

    logging.basicConfig(
        level=getattr(logging, level.value),
        stream=sys.stdout,
        format="%(message)s",
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            add_timestamp,
            add_service_context,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            *_render_processors(fmt),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if service_name:
        structlog.contextvars.bind_contextvars(service=service_name)

    # One event per cluster request is logged by the client itself
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _enum_value(value) -> str:
    # settings hand over enums, callers may pass plain strings
    return value.value if isinstance(value, Enum) else str(value)


def _render_processors(fmt: LogFormat) -> list[Processor]:
    if fmt == LogFormat.JSON:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        ),
    ]


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (defaults to module name)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_cluster_call_start(
    logger: structlog.stdlib.BoundLogger,
    cluster: str,
    url: str,
) -> None:
    """Log the start of a request to a cluster API."""
    logger.debug("Cluster request started", cluster=cluster, url=url)


def log_cluster_call_end(
    logger: structlog.stdlib.BoundLogger,
    cluster: str,
    url: str,
    outcome: str,
    duration_ms: float,
    error: str | None = None,
    status_code: int | None = None,
) -> None:
    """Log the outcome of a request to a cluster API.

    Unreachable outcomes log at warning level, all others at debug.
    """
    log_data = {
        "cluster": cluster,
        "url": url,
        "outcome": outcome,
        "duration_ms": round(duration_ms, 2),
    }
    if status_code is not None:
        log_data["status_code"] = status_code
    if error:
        log_data["error"] = error

    if outcome == "UNREACHABLE":
        logger.warning("Cluster request failed", **log_data)
    else:
        logger.debug("Cluster request completed", **log_data)
