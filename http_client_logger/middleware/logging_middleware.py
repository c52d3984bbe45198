"""
HTTP client request logging middleware.

Logs one start event before handing the request to the next stage and one
end event when a response comes back, with elapsed time and status code.
Requests at or above the slow threshold are logged as warnings. Optional
header and body detail events are emitted at DEBUG level, or at TRACE for
the scope stage.

This stage is installed last so it sees the request exactly as it is sent,
after auth, retries and any other stages have run.
"""

import logging
import time
from typing import Awaitable, Callable, Optional

import httpx

from ..errors import InvalidRequestError
from ..events import LogEvent, StageEvents, StageLogger, TRANSPORT_EVENTS
from ..log_values import ContentLogValue, HeadersLogValue, Kind
from ..options import LoggingOptions
from ..stopwatch import Clock, Stopwatch

CallNext = Callable[[httpx.Request], Awaitable[httpx.Response]]


class BaseLoggingMiddleware:
    """Timing and start/end logging shared by the pipeline stages."""

    events: StageEvents
    detail_level: int = logging.DEBUG

    def __init__(
        self,
        logger: StageLogger,
        options: Optional[LoggingOptions] = None,
        clock: Clock = time.perf_counter,
    ):
        self.logger = logger
        self.options = options or LoggingOptions()
        self.clock = clock

    async def __call__(self, request: httpx.Request, call_next: CallNext) -> httpx.Response:
        if request is None:
            raise InvalidRequestError(type(self).__name__)
        return await self.dispatch(request, call_next)

    async def dispatch(self, request: httpx.Request, call_next: CallNext) -> httpx.Response:
        stopwatch = Stopwatch.start(self.clock)

        await self.log_request_start(request)
        # Faults and cancellation propagate as is; no end event for them
        response = await call_next(request)
        await self.log_request_end(response, stopwatch.elapsed_ms())

        return response

    async def log_request_start(self, request: httpx.Request) -> None:
        self.logger.emit(self.events.start, http_method=request.method, uri=str(request.url))

        detail = self.logger.is_enabled(self.detail_level)
        if self.options.log_request_header and detail:
            self.logger.emit_value(
                self.events.request_header, HeadersLogValue.for_message(Kind.REQUEST, request)
            )
        if self.options.log_request_body and detail:
            await self._emit_content(self.events.request_content, ContentLogValue(Kind.REQUEST, request))

    async def log_request_end(self, response: httpx.Response, elapsed_ms: float) -> None:
        # The logged value is the one compared against the threshold
        elapsed_ms = round(elapsed_ms, 1)
        if self.options.is_slow(elapsed_ms):
            event = self.events.end_too_slow
        else:
            event = self.events.end
        self.logger.emit(event, elapsed_ms=elapsed_ms, status_code=response.status_code)

        detail = self.logger.is_enabled(self.detail_level)
        if self.options.log_response_header and detail:
            self.logger.emit_value(
                self.events.response_header, HeadersLogValue.for_message(Kind.RESPONSE, response)
            )
        if self.options.log_response_body and detail:
            await self._emit_content(
                self.events.response_content, ContentLogValue(Kind.RESPONSE, response)
            )

    async def _emit_content(self, event: LogEvent, value: ContentLogValue) -> None:
        await value.buffer()
        self.logger.emit_value(event, value)


class HttpLoggingMiddleware(BaseLoggingMiddleware):
    """Innermost stage: wraps only the actual network send."""

    events = TRANSPORT_EVENTS
