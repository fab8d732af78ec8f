"""
zipweather.api.routers.resolution

Resolution service surface: `GET /zipcode?zipcode=<8 digits>`.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Request
from opentelemetry.trace import SpanKind
from starlette.status import HTTP_200_OK

from zipweather.api.cancellation import run_bound_to_request
from zipweather.api.deps import resolution_service_dep, settings_dep, tracing_dep
from zipweather.domain.errors import PipelineError
from zipweather.domain.models import ComposedResponse
from zipweather.observability.tracing import HTTP_RESPONSE_STATUS, Tracing, trace_id_of
from zipweather.services.resolution_service import ResolutionService
from zipweather.settings import Settings

router = APIRouter(tags=["resolution"])

HANDLER_SPAN_NAME = "TemperatureHandler"


@router.get("/zipcode", response_model=ComposedResponse)
async def temperature_by_zipcode(
    request: Request,
    zipcode: str = "",
    settings: Settings = Depends(settings_dep),
    tracing: Tracing = Depends(tracing_dep),
    service: ResolutionService = Depends(resolution_service_dep),
) -> ComposedResponse:
    # Parent is the caller's "external call" span when a traceparent header is present.
    ctx = tracing.extract(request.headers)
    with tracing.start_span(ctx, HANDLER_SPAN_NAME, kind=SpanKind.SERVER) as (ctx, span):
        ctx = tracing.mark_received(ctx, settings.request_name)
        structlog.contextvars.bind_contextvars(trace_id=trace_id_of(ctx))

        try:
            response = await run_bound_to_request(
                request,
                service.resolve,
                ctx,
                zipcode,
                timeout=settings.request_timeout_seconds,
            )
        except PipelineError as e:
            span.set_attribute(HTTP_RESPONSE_STATUS, e.status_code)
            raise
        span.set_attribute(HTTP_RESPONSE_STATUS, HTTP_200_OK)
        return response


# --- Module Notes -----------------------------------------------------------
# Failures are rendered by `api.errors`; this router only records the outcome status.
