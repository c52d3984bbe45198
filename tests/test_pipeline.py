"""
Tests for pipeline assembly

Stage ordering, builder filters, logger naming and the httpx transport.
"""

import httpx
import pytest

from http_client_logger.config import Settings
from http_client_logger.errors import InvalidOptionsError, InvalidStageError
from http_client_logger.extensions import (
    HttpLoggingFilter,
    add_http_logging,
    logical_logger_name,
    transport_logger_name,
)
from http_client_logger.middleware import HttpLoggingMiddleware, HttpLoggingScopeMiddleware
from http_client_logger.options import LoggingOptions
from http_client_logger.pipeline import DEFAULT_PIPELINE_NAME, HttpPipeline, PipelineTransport

from conftest import event_names, json_response


def _recording_stage(name, calls):
    async def stage(request, call_next):
        calls.append(f"{name}:before")
        response = await call_next(request)
        calls.append(f"{name}:after")
        return response

    return stage


def _transport(calls=None):
    def handler(request):
        if calls is not None:
            calls.append("send")
        return json_response()

    return httpx.MockTransport(handler)


class TestHttpPipeline:

    def test_blank_name_falls_back_to_default(self):
        assert HttpPipeline().name == DEFAULT_PIPELINE_NAME
        assert HttpPipeline("   ").name == DEFAULT_PIPELINE_NAME
        assert HttpPipeline(" billing ").name == "billing"

    def test_non_callable_stage_rejected(self):
        with pytest.raises(InvalidStageError):
            HttpPipeline("billing").add_stage("not a stage")

    @pytest.mark.asyncio
    async def test_stages_run_in_order(self):
        calls = []
        pipeline = HttpPipeline("billing", transport=_transport(calls))
        pipeline.add_stage(_recording_stage("auth", calls))
        pipeline.add_stage(_recording_stage("retry", calls))

        async with pipeline.build_client() as client:
            response = await client.get("http://example/api")

        assert response.json() == {"ok": True}
        assert calls == ["auth:before", "retry:before", "send", "retry:after", "auth:after"]

    def test_build_transport_without_stages(self):
        transport = HttpPipeline("billing", transport=_transport()).build_transport()

        assert isinstance(transport, PipelineTransport)
        assert transport.stages == []


class TestAddHttpLogging:

    def test_wraps_existing_stages(self):
        first = _recording_stage("auth", [])
        second = _recording_stage("retry", [])
        pipeline = HttpPipeline("billing").add_stage(first).add_stage(second)

        add_http_logging(pipeline, options=LoggingOptions())
        stages = pipeline.build().stages

        assert isinstance(stages[0], HttpLoggingScopeMiddleware)
        assert stages[1:3] == [first, second]
        assert isinstance(stages[3], HttpLoggingMiddleware)

    def test_stages_added_later_are_still_wrapped(self):
        pipeline = HttpPipeline("billing")
        add_http_logging(pipeline, options=LoggingOptions())
        late = _recording_stage("late", [])
        pipeline.add_stage(late)

        stages = pipeline.build().stages

        assert stages[1] is late
        assert isinstance(stages[-1], HttpLoggingMiddleware)

    def test_second_install_replaces_the_first(self):
        pipeline = HttpPipeline("billing")
        add_http_logging(pipeline, options=LoggingOptions())
        add_http_logging(pipeline, options=LoggingOptions(log_request_body=True))

        stages = pipeline.build().stages

        assert len(stages) == 2
        assert len([f for f in pipeline.filters if isinstance(f, HttpLoggingFilter)]) == 1
        assert stages[0].options.log_request_body is True

    def test_both_stages_share_one_options_instance(self):
        options = LoggingOptions(log_response_body=True)
        pipeline = add_http_logging(HttpPipeline("billing"), options=options)

        scope, transport = pipeline.build().stages

        assert scope.options is transport.options
        assert scope.options == options

    def test_changing_caller_options_after_install_has_no_effect(self):
        options = LoggingOptions()
        pipeline = add_http_logging(HttpPipeline("billing"), options=options)

        options.log_request_body = True
        scope, transport = pipeline.build().stages

        assert scope.options.log_request_body is False
        assert transport.options.log_request_body is False

    def test_logger_names_follow_pipeline_name(self):
        pipeline = add_http_logging(HttpPipeline("billing"), options=LoggingOptions())

        scope, transport = pipeline.build().stages

        assert scope.logger.name == logical_logger_name("billing")
        assert scope.logger.name == "http_client_logger.client.billing.logical"
        assert transport.logger.name == transport_logger_name("billing")
        assert transport.logger.name == "http_client_logger.client.billing.transport"

    def test_options_from_settings_and_callback(self):
        settings = Settings(http_log_request_header=True, http_slow_request_threshold_ms=900)

        def configure(ambient, options):
            options.log_response_header = True

        pipeline = add_http_logging(HttpPipeline("billing"), configure=configure, settings=settings)
        options = pipeline.build().stages[0].options

        assert options.log_request_header is True
        assert options.log_response_header is True
        assert options.slow_request_logging_threshold == 900

    def test_invalid_options_fail_at_assembly(self):
        with pytest.raises(InvalidOptionsError):
            add_http_logging(
                HttpPipeline("billing"),
                options=LoggingOptions(slow_request_logging_threshold=-5),
            )

    @pytest.mark.asyncio
    async def test_logging_stages_surround_other_stages(self, captured):
        calls = []

        async def marking_stage(request, call_next):
            calls.append(list(event_names(captured)))
            return await call_next(request)

        pipeline = HttpPipeline("billing", transport=_transport())
        pipeline.add_stage(marking_stage)
        add_http_logging(pipeline, options=LoggingOptions())

        async with pipeline.build_client() as client:
            await client.get("http://example/api")

        # Only the scope stage has logged when the middle stage runs
        assert calls == [["RequestPipelineStart"]]
        assert event_names(captured) == [
            "RequestPipelineStart",
            "RequestStart",
            "RequestEnd",
            "RequestPipelineEnd",
        ]
