"""
zipweather.clients.resolution

Entry-side client for the resolution service (the second hop).

Responsibilities:
- Issue `GET /zipcode?zipcode=...` inside a client span with trace headers injected.
- Relay the downstream classification unchanged (404 -> NotFound, 422 -> InvalidInput,
  anything else non-200 -> UpstreamError).
"""

from __future__ import annotations

import httpx
from opentelemetry.context import Context
from opentelemetry.trace import SpanKind
from pydantic import ValidationError

from zipweather.domain.errors import (
    INVALID_ZIPCODE_MESSAGE,
    ZIPCODE_NOT_FOUND_MESSAGE,
    InvalidInput,
    NotFound,
    UpstreamError,
    bound_detail,
)
from zipweather.domain.models import ComposedResponse, ErrorBody
from zipweather.observability.logging import get_logger
from zipweather.observability.tracing import Tracing
from zipweather.settings import Settings

log = get_logger(__name__)

SPAN_NAME = "external call: getTemperatureByZipCode"


class ResolutionClient:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient, tracing: Tracing) -> None:
        self._settings = settings
        self._http = http
        self._tracing = tracing

    async def temperature_by_zipcode(self, ctx: Context, zipcode: str) -> ComposedResponse:
        url = f"{self._settings.resolution_service_url.rstrip('/')}/zipcode"
        with self._tracing.start_span(ctx, SPAN_NAME, kind=SpanKind.CLIENT) as (call_ctx, span):
            try:
                r = await self._http.get(
                    url,
                    params={"zipcode": zipcode},
                    headers=self._tracing.outbound_headers(call_ctx),
                )
            except httpx.HTTPError as e:
                log.warning("resolution_service_unreachable", error=type(e).__name__)
                raise UpstreamError(
                    "failed to reach resolution service",
                    detail=bound_detail(e, limit=self._settings.max_error_detail_chars),
                ) from e
            span.set_attribute("http.response.status_code", r.status_code)

        return self._relay(r)

    def _relay(self, r: httpx.Response) -> ComposedResponse:
        if r.status_code == httpx.codes.OK:
            try:
                return ComposedResponse.model_validate_json(r.content)
            except ValidationError as e:
                raise UpstreamError("invalid response from resolution service") from e

        message = self._error_message(r)
        if r.status_code == httpx.codes.NOT_FOUND:
            raise NotFound(message or ZIPCODE_NOT_FOUND_MESSAGE)
        if r.status_code == httpx.codes.UNPROCESSABLE_ENTITY:
            raise InvalidInput(message or INVALID_ZIPCODE_MESSAGE)
        raise UpstreamError(message or f"resolution service returned {r.status_code}")

    def _error_message(self, r: httpx.Response) -> str | None:
        try:
            body = ErrorBody.model_validate_json(r.content)
        except ValidationError:
            return None
        return bound_detail(body.message, limit=self._settings.max_error_detail_chars)


# --- Module Notes -----------------------------------------------------------
# Downstream 4xx classifications are re-raised with the same type, so the entry hop answers
# with the resolution hop's status and message.
