"""
zipweather.api.routers.entry

Entry service surface: `POST /zipcode` with body `{"cep": "<8 digits>"}`.

Responsibilities:
- Extract (or start) the trace, record receipt, and open the handler span.
- Run the entry pipeline bound to the inbound request's lifetime.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Request
from opentelemetry.trace import SpanKind
from starlette.status import HTTP_200_OK

from zipweather.api.cancellation import run_bound_to_request
from zipweather.api.deps import entry_service_dep, settings_dep, tracing_dep
from zipweather.domain.errors import PipelineError
from zipweather.domain.models import ComposedResponse
from zipweather.observability.tracing import HTTP_RESPONSE_STATUS, Tracing, trace_id_of
from zipweather.services.entry_service import EntryService
from zipweather.settings import Settings

router = APIRouter(tags=["entry"])

HANDLER_SPAN_NAME = "ZipCodeHandler"


@router.post("/zipcode", response_model=ComposedResponse)
async def temperature_by_zipcode(
    request: Request,
    settings: Settings = Depends(settings_dep),
    tracing: Tracing = Depends(tracing_dep),
    service: EntryService = Depends(entry_service_dep),
) -> ComposedResponse:
    ctx = tracing.extract(request.headers)
    with tracing.start_span(ctx, HANDLER_SPAN_NAME, kind=SpanKind.SERVER) as (ctx, span):
        ctx = tracing.mark_received(ctx, settings.request_name)
        structlog.contextvars.bind_contextvars(trace_id=trace_id_of(ctx))

        # The body is read raw: a non-JSON payload must map to 400, not FastAPI's 422.
        body = await request.body()
        try:
            response = await run_bound_to_request(
                request,
                service.forward,
                ctx,
                body,
                timeout=settings.request_timeout_seconds,
            )
        except PipelineError as e:
            span.set_attribute(HTTP_RESPONSE_STATUS, e.status_code)
            raise
        span.set_attribute(HTTP_RESPONSE_STATUS, HTTP_200_OK)
        return response


# --- Module Notes -----------------------------------------------------------
# The downstream status is relayed through `ResolutionClient`; nothing is reinterpreted here.
