"""
Structured logging configuration using structlog.

Produces JSON logs in production, human-readable colored logs in development.
Correlation fields bound by the request pipeline scope are merged into every
record through ``merge_contextvars``.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import get_settings
from .events import TRACE


def setup_logging(log_level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """Configure structlog for structured JSON logging.

    Args:
        log_level: Override log level (default: from settings.log_level)
        json_logs: Force JSON (True) or console (False) rendering.
            Defaults to console in DEBUG or TRACE, otherwise settings.json_logs.
    """
    settings = get_settings()
    name = (log_level or settings.log_level).upper()
    level = TRACE if name == "TRACE" else getattr(logging, name, logging.INFO)
    if json_logs is None:
        json_logs = settings.json_logs and level > logging.DEBUG

    # Shared processors for both structlog and stdlib
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        # Production: JSON lines
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        # Development: colored console output
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Route stdlib logging through structlog's formatter
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Quiet the transport's own loggers, the pipeline stages report requests
    for name in ("httpcore", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)
