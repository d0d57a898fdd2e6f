"""
Logging Configuration

Structured logging setup using structlog, so that every orchestration step
(rename propagation, cascade delete, uploads) emits parseable key-value events.

Log Output:
===========
Development:
    2025-01-15 10:30:00 [info     ] cascade.step_done              step=delete_comments username=alice

Production (JSON):
    {"timestamp": "2025-01-15T10:30:00", "level": "info", "event": "cascade.step_done", "username": "alice"}

Usage:
======
    from app.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("upload.committed", object_name=name, bucket=bucket)
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from app.core.config import settings


def setup_logging() -> None:
    """
    Configure structlog on top of the standard logging module.

    - dev / test : colored console output
    - prod       : JSON output for log aggregation
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.ENV == "prod":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=settings.ENV == "dev"),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """Bind key-values to every subsequent log line of the current context (request)."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    structlog.contextvars.clear_contextvars()


setup_logging()
