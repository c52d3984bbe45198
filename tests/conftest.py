"""Shared fixtures for the HTTP client logging tests."""

import logging

import httpx
import pytest
import structlog
from structlog.testing import LogCapture


class FakeClock:
    """Monotonic clock driven by the test, in milliseconds."""

    def __init__(self, start_ms: float = 0):
        self.ms = start_ms

    def __call__(self) -> float:
        return self.ms / 1000

    def advance(self, ms: float) -> None:
        self.ms += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def captured():
    """Capture structlog events, with correlation context merged in."""
    cap = LogCapture()
    structlog.configure(processors=[structlog.contextvars.merge_contextvars, cap])
    structlog.contextvars.clear_contextvars()
    yield cap
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.fixture
def logger_level():
    """Set stdlib logger levels for the duration of a test."""
    previous = {}

    def _set(name: str, level: int) -> None:
        stdlib_logger = logging.getLogger(name)
        previous.setdefault(name, stdlib_logger.level)
        stdlib_logger.setLevel(level)

    yield _set

    for name, level in previous.items():
        logging.getLogger(name).setLevel(level)


def json_response(body: bytes = b'{"ok":true}', status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        headers={"content-type": "application/json"},
        content=body,
    )


def event_names(cap: LogCapture):
    return [entry.get("event_name") for entry in cap.entries]
