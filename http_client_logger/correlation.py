"""
Correlation scope for one logical HTTP request.

Binds the request's method and URI into structlog's context variables so
every event logged while the downstream pipeline runs (retries, auth, the
transport stage) is attributable to the same request. Context variables
follow the task across ``await`` points and never leak between concurrent
requests.
"""

from contextlib import contextmanager
from typing import Dict, Iterator

import httpx
import structlog


def scope_fields(request: httpx.Request) -> Dict[str, str]:
    method = request.method
    uri = str(request.url)
    return {
        "http_scope": f"HTTP {method} {uri}",
        "http_method": method,
        "http_uri": uri,
    }


@contextmanager
def request_pipeline_scope(request: httpx.Request) -> Iterator[Dict[str, str]]:
    """Bind the correlation fields for the duration of the ``with`` block.

    The previous values are restored on every exit path, including
    exceptions and task cancellation.
    """
    fields = scope_fields(request)
    tokens = structlog.contextvars.bind_contextvars(**fields)
    try:
        yield fields
    finally:
        structlog.contextvars.reset_contextvars(**tokens)
