"""
Install the logging stages into a named pipeline.

Usage:
    pipeline = HttpPipeline("coingecko")
    pipeline.add_stage(retry_stage)
    add_http_logging(pipeline, configure=lambda settings, options: ...)
    client = pipeline.build_client(base_url="https://api.coingecko.com")
"""

import time
from typing import Optional

from .config import Settings
from .events import StageLogger
from .middleware import HttpLoggingMiddleware, HttpLoggingScopeMiddleware
from .options import ConfigureOptions, LoggingOptions, resolve_options
from .pipeline import HttpPipeline, PipelineBuilder
from .stopwatch import Clock

LOGGER_PREFIX = "http_client_logger.client"


def logical_logger_name(pipeline_name: str) -> str:
    return f"{LOGGER_PREFIX}.{pipeline_name}.logical"


def transport_logger_name(pipeline_name: str) -> str:
    return f"{LOGGER_PREFIX}.{pipeline_name}.transport"


class HttpLoggingFilter:
    """Wraps a pipeline's stages with the scope and transport logging stages."""

    def __init__(self, options: LoggingOptions, clock: Clock = time.perf_counter):
        self.options = options
        self.clock = clock

    def __call__(self, builder: PipelineBuilder) -> None:
        outer = StageLogger(logical_logger_name(builder.name))
        inner = StageLogger(transport_logger_name(builder.name))

        # The scope goes first so it surrounds everything
        builder.stages.insert(0, HttpLoggingScopeMiddleware(outer, self.options, self.clock))

        # Last, so it logs the request as sent after auth and discovery
        builder.stages.append(HttpLoggingMiddleware(inner, self.options, self.clock))


def add_http_logging(
    pipeline: HttpPipeline,
    options: Optional[LoggingOptions] = None,
    configure: Optional[ConfigureOptions] = None,
    settings: Optional[Settings] = None,
    clock: Clock = time.perf_counter,
) -> HttpPipeline:
    """Install request logging on ``pipeline``, replacing any earlier install.

    Args:
        pipeline: The named pipeline to instrument
        options: Explicit options (default: built from settings)
        configure: Callback ``(settings, options)`` run once before first use
        settings: Ambient settings (default: ``get_settings()``)
        clock: Monotonic clock in seconds, for tests

    Returns:
        The same pipeline, for chaining
    """
    resolved = resolve_options(options, configure, settings)

    pipeline.filters = [f for f in pipeline.filters if not isinstance(f, HttpLoggingFilter)]
    pipeline.add_filter(HttpLoggingFilter(resolved, clock))
    return pipeline
