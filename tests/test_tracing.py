"""
tests.test_tracing

Trace propagator behavior: extract/inject over plain header maps and scoped spans.
"""

from __future__ import annotations

import asyncio

import pytest
from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.trace import StatusCode

from zipweather.domain.errors import NotFound, UpstreamError
from zipweather.observability.tracing import (
    Tracing,
    TracingInitError,
    build_tracer_provider,
    otlp_traces_url,
    trace_id_of,
)
from zipweather.settings import Settings

TRACEPARENT = "00-0af7651916cd43dd8448eb211c80319c-b7ad6b7169203331-01"


@pytest.fixture
def captured(entry_spans):
    return entry_spans


@pytest.fixture
def tracing(captured) -> Tracing:
    return Tracing(provider=captured.provider)


def test_extract_without_header_starts_new_trace(tracing: Tracing, captured) -> None:
    ctx = tracing.extract({})
    assert trace_id_of(ctx) is None

    with tracing.start_span(ctx, "root") as (child, _):
        assert trace_id_of(child) is not None

    (root,) = captured.all()
    assert root.parent is None


def test_extract_reads_traceparent_case_insensitively(tracing: Tracing) -> None:
    ctx = tracing.extract({"Traceparent": TRACEPARENT})
    assert trace_id_of(ctx) == "0af7651916cd43dd8448eb211c80319c"


def test_extract_ignores_malformed_traceparent(tracing: Tracing) -> None:
    assert trace_id_of(tracing.extract({"traceparent": "garbage"})) is None


def test_inject_carries_trace_id_and_calling_span(
    tracing: Tracing, captured, resolution_spans
) -> None:
    ctx = tracing.extract({"traceparent": TRACEPARENT})
    with tracing.start_span(ctx, "external call") as (call_ctx, span):
        headers = tracing.outbound_headers(call_ctx)

    span_id = trace.format_span_id(span.get_span_context().span_id)
    assert headers["traceparent"] == f"00-0af7651916cd43dd8448eb211c80319c-{span_id}-01"

    # The next hop's extract rebuilds the same trace with the calling span as parent.
    downstream = Tracing(provider=resolution_spans.provider)
    remote = trace.get_current_span(downstream.extract(headers)).get_span_context()
    assert remote.is_remote
    assert remote.span_id == span.get_span_context().span_id


def test_span_ends_and_records_error_on_exception(tracing: Tracing, captured) -> None:
    with pytest.raises(ValueError):
        with tracing.start_span(Context(), "failing"):
            raise ValueError("boom")

    (span,) = captured.all()
    assert span.end_time is not None
    assert span.status.status_code is StatusCode.ERROR
    assert span.events[0].name == "exception"


def test_client_error_leaves_span_status_unset(tracing: Tracing, captured) -> None:
    with pytest.raises(NotFound):
        with tracing.start_span(Context(), "lookup"):
            raise NotFound("can not find zipcode")

    span = captured.named("lookup")
    assert span.end_time is not None
    assert span.status.status_code is StatusCode.UNSET
    assert not span.events


def test_upstream_error_marks_span_as_error(tracing: Tracing, captured) -> None:
    with pytest.raises(UpstreamError):
        with tracing.start_span(Context(), "external call: getWeather"):
            raise UpstreamError("failed to get weather info")

    span = captured.named("external call: getWeather")
    assert span.status.status_code is StatusCode.ERROR
    assert span.events[0].name == "exception"


def test_span_ends_on_early_return(tracing: Tracing, captured) -> None:
    def handler() -> str:
        with tracing.start_span(Context(), "short-circuit"):
            return "early"

    assert handler() == "early"
    assert captured.named("short-circuit").end_time is not None


@pytest.mark.asyncio
async def test_span_ends_when_task_is_cancelled(tracing: Tracing, captured) -> None:
    started = asyncio.Event()

    async def call() -> None:
        with tracing.start_span(Context(), "external call: getWeather"):
            started.set()
            await asyncio.sleep(10)

    task = asyncio.create_task(call())
    await started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert captured.named("external call: getWeather").end_time is not None


def test_mark_received_is_closed_and_becomes_parent(tracing: Tracing, captured) -> None:
    ctx = tracing.mark_received(Context(), "service-a-request")
    marker = captured.named("request received service-a-request")
    assert marker.end_time is not None

    with tracing.start_span(ctx, "external call"):
        pass
    call = captured.named("external call")
    assert call.parent is not None
    assert call.parent.span_id == marker.context.span_id
    assert call.context.trace_id == marker.context.trace_id


@pytest.mark.parametrize(
    ("endpoint", "expected"),
    [
        ("otel-collector:4318", "http://otel-collector:4318/v1/traces"),
        ("http://otel-collector:4318/", "http://otel-collector:4318/v1/traces"),
        ("https://collector.example/custom/path", "https://collector.example/custom/path"),
    ],
)
def test_otlp_traces_url(endpoint: str, expected: str) -> None:
    assert otlp_traces_url(endpoint) == expected


def test_build_tracer_provider_sets_service_name() -> None:
    provider = build_tracer_provider(Settings(env="test", service_name="service-b"))
    assert provider.resource.attributes["service.name"] == "service-b"
    provider.shutdown()


def test_build_tracer_provider_failure_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(**_: object) -> None:
        raise ValueError("bad endpoint")

    monkeypatch.setattr("zipweather.observability.tracing.OTLPSpanExporter", broken)
    with pytest.raises(TracingInitError):
        build_tracer_provider(
            Settings(env="test", otel_exporter_otlp_endpoint="otel-collector:4318")
        )
