"""
Named outbound HTTP pipelines.

A pipeline is an ordered list of stages in front of an httpx transport.
Each stage is an async callable ``stage(request, call_next)``. Builder
filters get a last look at the stage list when the transport is built, which
is how the logging stages wrap everything else that was configured.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional

import httpx

from .errors import InvalidStageError

logger = logging.getLogger(__name__)

DEFAULT_PIPELINE_NAME = "default"

CallNext = Callable[[httpx.Request], Awaitable[httpx.Response]]
Stage = Callable[[httpx.Request, CallNext], Awaitable[httpx.Response]]


@dataclass
class PipelineBuilder:
    """Mutable view of a pipeline handed to builder filters."""

    name: str
    stages: List[Stage] = field(default_factory=list)


PipelineFilter = Callable[[PipelineBuilder], None]


def _bind(stage: Stage, call_next: CallNext) -> CallNext:
    async def call(request: httpx.Request) -> httpx.Response:
        return await stage(request, call_next)

    return call


class PipelineTransport(httpx.AsyncBaseTransport):
    """Runs requests through the stages, then the inner transport."""

    def __init__(self, stages: List[Stage], transport: httpx.AsyncBaseTransport):
        self.stages = list(stages)
        self.transport = transport

        handler: CallNext = transport.handle_async_request
        for stage in reversed(self.stages):
            handler = _bind(stage, handler)
        self._handler = handler

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self._handler(request)

    async def aclose(self) -> None:
        await self.transport.aclose()


class HttpPipeline:
    """A named, ordered set of stages for one kind of outbound client."""

    def __init__(self, name: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.name = name.strip() if name and name.strip() else DEFAULT_PIPELINE_NAME
        self.transport = transport
        self.stages: List[Stage] = []
        self.filters: List[PipelineFilter] = []

    def add_stage(self, stage: Stage) -> "HttpPipeline":
        if not callable(stage):
            raise InvalidStageError(stage)
        self.stages.append(stage)
        return self

    def add_filter(self, pipeline_filter: PipelineFilter) -> "HttpPipeline":
        if not callable(pipeline_filter):
            raise InvalidStageError(pipeline_filter)
        self.filters.append(pipeline_filter)
        return self

    def build(self) -> PipelineBuilder:
        """Apply the filters to a copy of the configured stages."""
        builder = PipelineBuilder(name=self.name, stages=list(self.stages))
        for pipeline_filter in self.filters:
            pipeline_filter(builder)
        for stage in builder.stages:
            if not callable(stage):
                raise InvalidStageError(stage)
        return builder

    def build_transport(self) -> PipelineTransport:
        builder = self.build()
        transport = self.transport or httpx.AsyncHTTPTransport()
        logger.debug(
            "Built HTTP pipeline %s with %d stage(s)", self.name, len(builder.stages)
        )
        return PipelineTransport(builder.stages, transport)

    def build_client(self, **kwargs: Any) -> httpx.AsyncClient:
        """Create an ``httpx.AsyncClient`` sending through this pipeline."""
        return httpx.AsyncClient(transport=self.build_transport(), **kwargs)
