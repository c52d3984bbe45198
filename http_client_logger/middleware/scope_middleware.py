"""
HTTP client pipeline scope middleware.

Outermost stage. Opens a correlation scope keyed by method and URI, then logs
pipeline start/end around the whole downstream chain, so the elapsed time
includes retries, auth and every other stage.
"""

import httpx

from ..correlation import request_pipeline_scope
from ..events import PIPELINE_EVENTS, TRACE
from .logging_middleware import BaseLoggingMiddleware, CallNext


class HttpLoggingScopeMiddleware(BaseLoggingMiddleware):
    """Logs the logical request and binds its correlation scope."""

    events = PIPELINE_EVENTS
    # Details only at TRACE; the transport stage logs them at DEBUG
    detail_level = TRACE

    async def dispatch(self, request: httpx.Request, call_next: CallNext) -> httpx.Response:
        with request_pipeline_scope(request):
            return await super().dispatch(request, call_next)
