"""Structured logging setup.

Every module logs through ``structlog.get_logger(__name__)`` with short event
names and key/value context. Call :func:`configure_logging` once at startup.
"""

import logging
import sys

import structlog

from identity_cache.config import settings


def configure_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Log level name. Defaults to settings.log_level.
        json_output: Render JSON lines instead of console output.
                     Defaults to settings.log_json.
    """
    level_name = (level or settings.log_level).upper()
    use_json = settings.log_json if json_output is None else json_output

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
    )

    renderer: structlog.types.Processor
    if use_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
