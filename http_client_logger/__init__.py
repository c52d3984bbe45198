"""
HTTP client logging.

Instrumentation stages for outbound httpx pipelines: a scope stage around the
whole pipeline and a transport stage around the network send, both logging
start/end events with timing, status and optional headers and bodies.
"""

from .config import Settings, get_settings
from .correlation import request_pipeline_scope
from .errors import (
    HttpLoggingError,
    InvalidOptionsError,
    InvalidRequestError,
    InvalidStageError,
)
from .events import PIPELINE_EVENTS, TRACE, TRANSPORT_EVENTS, LogEvent, StageEvents, StageLogger
from .extensions import (
    HttpLoggingFilter,
    add_http_logging,
    logical_logger_name,
    transport_logger_name,
)
from .log_values import ContentLogValue, HeadersLogValue, Kind
from .logging_config import setup_logging
from .middleware import HttpLoggingMiddleware, HttpLoggingScopeMiddleware
from .options import LoggingOptions
from .pipeline import HttpPipeline, PipelineBuilder, PipelineTransport
from .stopwatch import Stopwatch

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "LoggingOptions",
    "setup_logging",
    # Errors
    "HttpLoggingError",
    "InvalidOptionsError",
    "InvalidRequestError",
    "InvalidStageError",
    # Stages
    "HttpLoggingMiddleware",
    "HttpLoggingScopeMiddleware",
    "request_pipeline_scope",
    # Events
    "LogEvent",
    "StageEvents",
    "StageLogger",
    "PIPELINE_EVENTS",
    "TRANSPORT_EVENTS",
    "TRACE",
    # Log values
    "ContentLogValue",
    "HeadersLogValue",
    "Kind",
    "Stopwatch",
    # Pipeline
    "HttpPipeline",
    "PipelineBuilder",
    "PipelineTransport",
    "HttpLoggingFilter",
    "add_http_logging",
    "logical_logger_name",
    "transport_logger_name",
]
