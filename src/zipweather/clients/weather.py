"""
zipweather.clients.weather

Weather provider client (locality name -> current temperature).
"""

from __future__ import annotations

import httpx
from opentelemetry.context import Context
from opentelemetry.trace import SpanKind
from pydantic import ValidationError

from zipweather.domain.errors import UpstreamError, bound_detail
from zipweather.domain.models import WeatherReading
from zipweather.observability.logging import get_logger
from zipweather.observability.tracing import Tracing
from zipweather.settings import Settings

log = get_logger(__name__)

SPAN_NAME = "external call: getWeather"


class WeatherClient:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient, tracing: Tracing) -> None:
        self._settings = settings
        self._http = http
        self._tracing = tracing

    def _params(self, locality: str) -> dict[str, str]:
        # httpx escapes query values; the locality is passed through unmodified.
        params = {"q": locality}
        if self._settings.weather_api_key:
            params["key"] = self._settings.weather_api_key
        return params

    async def resolve(self, ctx: Context, locality: str) -> WeatherReading:
        with self._tracing.start_span(
            ctx, SPAN_NAME, kind=SpanKind.CLIENT, attributes={"zipweather.locality": locality}
        ) as (call_ctx, span):
            try:
                r = await self._http.get(
                    self._settings.weather_api_url,
                    params=self._params(locality),
                    headers=self._tracing.outbound_headers(call_ctx),
                )
                span.set_attribute("http.response.status_code", r.status_code)
                r.raise_for_status()
                return WeatherReading.model_validate_json(r.content)
            except (httpx.HTTPError, ValidationError) as e:
                log.warning("weather_lookup_failed", error=type(e).__name__)
                raise UpstreamError(
                    "failed to get weather info",
                    detail=bound_detail(e, limit=self._settings.max_error_detail_chars),
                ) from e


# --- Module Notes -----------------------------------------------------------
# The API key travels as a query parameter; `bound_detail` strips query strings so it
# never reaches a caller through an error message.
