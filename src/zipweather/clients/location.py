"""
zipweather.clients.location

Locality provider client (postal code -> locality name).
"""

from __future__ import annotations

import httpx
from opentelemetry.context import Context
from opentelemetry.trace import SpanKind
from pydantic import ValidationError

from zipweather.domain.errors import UpstreamError, bound_detail
from zipweather.domain.models import LocationInfo
from zipweather.observability.logging import get_logger
from zipweather.observability.tracing import Tracing
from zipweather.settings import Settings

log = get_logger(__name__)

SPAN_NAME = "external call: getLocation"


class LocationClient:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient, tracing: Tracing) -> None:
        self._settings = settings
        self._http = http
        self._tracing = tracing

    def _url(self, zipcode: str) -> str:
        return f"{self._settings.location_api_base_url.rstrip('/')}/{zipcode}/json/"

    async def resolve(self, ctx: Context, zipcode: str) -> str:
        """
        Return the locality for `zipcode`, or "" when the provider knows none.

        An empty result is a normal answer; only transport, status and decoding
        failures raise `UpstreamError`.
        """

        with self._tracing.start_span(
            ctx, SPAN_NAME, kind=SpanKind.CLIENT, attributes={"zipweather.zipcode": zipcode}
        ) as (call_ctx, span):
            try:
                r = await self._http.get(
                    self._url(zipcode), headers=self._tracing.outbound_headers(call_ctx)
                )
                span.set_attribute("http.response.status_code", r.status_code)
                r.raise_for_status()
                location = LocationInfo.model_validate_json(r.content)
            except (httpx.HTTPError, ValidationError) as e:
                log.warning("location_lookup_failed", error=type(e).__name__)
                raise UpstreamError(
                    "failed to get location info",
                    detail=bound_detail(e, limit=self._settings.max_error_detail_chars),
                ) from e
        return location.localidade


# --- Module Notes -----------------------------------------------------------
# An empty locality is returned, not raised; the resolution service decides it means NotFound.
