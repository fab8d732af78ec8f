"""
zipweather.observability.tracing

Trace context propagation and span lifecycle.

Responsibilities:
- Build the per-process `TracerProvider` (resource + optional OTLP/HTTP exporter).
- Extract/inject W3C trace context from/to plain string-keyed header maps.
- Open spans as scoped resources so they are ended on every exit path.

Nothing here touches OpenTelemetry's global tracer provider or global propagator:
a `Tracing` instance is built once per app and passed to routers, services and clients.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from contextlib import contextmanager
from typing import Any
from urllib.parse import urlsplit

from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Span, SpanKind, Status, StatusCode
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from zipweather.domain.errors import PipelineError
from zipweather.settings import Settings

INSTRUMENTATION_NAME = "zipweather"
HTTP_RESPONSE_STATUS = "http.response.status_code"


class TracingInitError(RuntimeError):
    """Raised when the tracer provider/exporter cannot be constructed (fatal at startup)."""


def otlp_traces_url(endpoint: str) -> str:
    """
    Normalize the collector endpoint.

    `otel-collector:4318` -> `http://otel-collector:4318/v1/traces`; an endpoint that
    already carries a scheme and a path is used as-is.
    """

    if "://" not in endpoint:
        endpoint = f"http://{endpoint}"
    parts = urlsplit(endpoint)
    if parts.path in ("", "/"):
        return f"{parts.scheme}://{parts.netloc}/v1/traces"
    return endpoint


def build_tracer_provider(settings: Settings) -> TracerProvider:
    try:
        provider = TracerProvider(
            resource=Resource.create(
                {
                    SERVICE_NAME: settings.service_name,
                    "zipweather.role": settings.role,
                    "zipweather.request_name": settings.request_name,
                }
            )
        )
        if settings.otel_exporter_otlp_endpoint:
            exporter = OTLPSpanExporter(
                endpoint=otlp_traces_url(settings.otel_exporter_otlp_endpoint)
            )
            provider.add_span_processor(BatchSpanProcessor(exporter))
    except Exception as e:
        raise TracingInitError(f"failed to initialize tracing: {e}") from e
    return provider


class Tracing:
    def __init__(
        self,
        *,
        provider: TracerProvider,
        propagator: TraceContextTextMapPropagator | None = None,
    ) -> None:
        self._provider = provider
        self._tracer = provider.get_tracer(INSTRUMENTATION_NAME)
        self._propagator = propagator or TraceContextTextMapPropagator()

    def extract(self, headers: Mapping[str, str]) -> Context:
        # No (or malformed) `traceparent` leaves the context empty: the next span is a new root.
        carrier = {k.lower(): v for k, v in headers.items()}
        return self._propagator.extract(carrier=carrier, context=Context())

    def inject(self, ctx: Context, headers: MutableMapping[str, str]) -> None:
        self._propagator.inject(headers, context=ctx)

    @contextmanager
    def start_span(
        self,
        ctx: Context,
        name: str,
        *,
        kind: SpanKind = SpanKind.INTERNAL,
        attributes: dict[str, Any] | None = None,
    ) -> Iterator[tuple[Context, Span]]:
        """
        Open `name` as a child of the span active in `ctx`.

        Yields the child context (new span active) and the span itself. The span
        is ended when the block exits, whether it returns, raises or is cancelled.
        """

        span = self._tracer.start_span(name, context=ctx, kind=kind, attributes=attributes)
        try:
            yield trace.set_span_in_context(span, ctx), span
        except Exception as e:
            # Caller-side outcomes (4xx) are answered normally; the span is not failed.
            if not isinstance(e, PipelineError) or e.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
                span.record_exception(e)
                span.set_status(Status(StatusCode.ERROR, type(e).__name__))
            raise
        finally:
            span.end()

    def mark_received(self, ctx: Context, label: str) -> Context:
        # Receipt marker: records arrival time only, it wraps no work.
        with self.start_span(ctx, f"request received {label}") as (marked, _):
            return marked

    def outbound_headers(self, ctx: Context) -> dict[str, str]:
        headers: dict[str, str] = {}
        self.inject(ctx, headers)
        return headers

    def shutdown(self) -> None:
        self._provider.shutdown()


def trace_id_of(ctx: Context) -> str | None:
    span_ctx = trace.get_current_span(ctx).get_span_context()
    if not span_ctx.is_valid:
        return None
    return trace.format_trace_id(span_ctx.trace_id)


# --- Module Notes -----------------------------------------------------------
# Span export is append-only from this module's point of view; batching and
# delivery to the collector belong to the SDK span processor.
