"""
Structured Logging Configuration

structlog on top of the standard library logging module:
- Console output for interactive use, JSON for log aggregation
- Everything goes to stderr; stdout is reserved for read output
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from . import config


def add_service_info(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add service information to log entries."""
    event_dict["service"] = config.SERVER_NAME
    return event_dict


def configure_logging(
    json_output: bool = False,
    log_level: str = "WARNING",
    include_timestamps: bool = True,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        json_output: Output logs as JSON
        log_level: Minimum log level
        include_timestamps: Include ISO timestamps

    Usage:
        configure_logging(json_output=False, log_level="DEBUG")
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_service_info,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamps:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))

    if json_output:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            )
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper(), logging.WARNING),
        force=True,
    )

    # FastMCP and its HTTP stack are chatty at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger.

    Usage:
        logger = get_logger(__name__)
        logger.info("batch applied", operations=3)
    """
    return structlog.get_logger(name)
