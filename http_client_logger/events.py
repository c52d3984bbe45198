"""
Log event definitions for the logging stages.

Each stage owns one ``StageEvents`` table built at import time. Event ids are
scoped per stage: both tables use 100-105, and consumers tell them apart by
``event_name`` or by logger name.
"""

import logging
from dataclasses import dataclass
from typing import Any

import structlog

# Finer than DEBUG; the scope stage gates its detail events on it
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


@dataclass(frozen=True)
class LogEvent:
    """A stable (id, name, level, message template) definition."""

    event_id: int
    name: str
    level: int
    template: str = "{message}"

    @property
    def method(self) -> str:
        # structlog has no trace method, so TRACE events are written as debug
        return logging.getLevelName(max(self.level, logging.DEBUG)).lower()

    def render(self, **fields: Any) -> str:
        return self.template.format(**fields)


@dataclass(frozen=True)
class StageEvents:
    start: LogEvent
    end: LogEvent
    end_too_slow: LogEvent
    request_header: LogEvent
    response_header: LogEvent
    request_content: LogEvent
    response_content: LogEvent


def _detail(event_id: int, name: str, level: int = logging.DEBUG) -> LogEvent:
    return LogEvent(event_id, name, level)


TRANSPORT_EVENTS = StageEvents(
    start=LogEvent(100, "RequestStart", logging.INFO, "Sending HTTP request {http_method} {uri}"),
    end=LogEvent(
        101,
        "RequestEnd",
        logging.INFO,
        "Received HTTP response after {elapsed_ms}ms - {status_code}",
    ),
    end_too_slow=LogEvent(
        101,
        "RequestEnd",
        logging.WARNING,
        "Received HTTP response too slow, elapsed: {elapsed_ms}ms - {status_code}",
    ),
    request_header=_detail(102, "RequestHeader"),
    response_header=_detail(103, "ResponseHeader"),
    request_content=_detail(104, "RequestContent"),
    response_content=_detail(105, "ResponseContent"),
)

PIPELINE_EVENTS = StageEvents(
    start=LogEvent(
        100,
        "RequestPipelineStart",
        logging.INFO,
        "Start processing HTTP request {http_method} {uri}",
    ),
    end=LogEvent(
        101,
        "RequestPipelineEnd",
        logging.INFO,
        "End processing HTTP request after {elapsed_ms}ms - {status_code}",
    ),
    end_too_slow=LogEvent(
        101,
        "RequestPipelineEnd",
        logging.WARNING,
        "End processing HTTP request too slow, elapsed: {elapsed_ms}ms - {status_code}",
    ),
    request_header=_detail(102, "RequestPipelineRequestHeader", TRACE),
    response_header=_detail(103, "RequestPipelineResponseHeader", TRACE),
    request_content=_detail(104, "RequestPipelineContent", TRACE),
    response_content=_detail(105, "ResponsePipelineContent", TRACE),
)


class StageLogger:
    """Structured logger used by a stage.

    Events go through structlog; the enabled check asks the stdlib logger of
    the same name, which is the logger structlog writes to once
    ``setup_logging`` has run.
    """

    def __init__(self, name: str):
        self.name = name
        self._logger = structlog.stdlib.get_logger(name)
        self._stdlib_logger = logging.getLogger(name)

    def is_enabled(self, level: int) -> bool:
        return self._stdlib_logger.isEnabledFor(level)

    def emit(self, event: LogEvent, **fields: Any) -> None:
        log = getattr(self._logger, event.method)
        log(
            event.render(**fields),
            event_id=event.event_id,
            event_name=event.name,
            **fields,
        )

    def emit_value(self, event: LogEvent, value: Any) -> None:
        """Log a deferred value; ``str(value)`` runs only if the gate is open."""
        if not self.is_enabled(event.level):
            return
        log = getattr(self._logger, event.method)
        log(str(value), event_id=event.event_id, event_name=event.name)
