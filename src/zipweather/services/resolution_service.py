"""
zipweather.services.resolution_service

Resolution pipeline: postal code -> locality -> weather -> composed response.

Responsibilities:
- Validate before any remote call.
- Call the location provider strictly before the weather provider.
- Turn an empty locality into `NotFound`; never return partial results.
"""

from __future__ import annotations

from opentelemetry.context import Context

from zipweather.clients.location import LocationClient
from zipweather.clients.weather import WeatherClient
from zipweather.domain.conversion import to_all_scales
from zipweather.domain.errors import (
    INVALID_ZIPCODE_MESSAGE,
    ZIPCODE_NOT_FOUND_MESSAGE,
    InvalidInput,
    NotFound,
)
from zipweather.domain.models import ComposedResponse
from zipweather.domain.validation import is_valid_zipcode
from zipweather.observability.logging import get_logger

log = get_logger(__name__)


class ResolutionService:
    def __init__(self, *, location: LocationClient, weather: WeatherClient) -> None:
        self._location = location
        self._weather = weather

    async def resolve(self, ctx: Context, zipcode: str) -> ComposedResponse:
        if not is_valid_zipcode(zipcode):
            raise InvalidInput(INVALID_ZIPCODE_MESSAGE)

        city = await self._location.resolve(ctx, zipcode)
        if not city:
            raise NotFound(ZIPCODE_NOT_FOUND_MESSAGE)
        log.info("location_resolved", zipcode=zipcode, city=city)

        # Any weather failure discards the resolved locality.
        reading = await self._weather.resolve(ctx, city)
        scales = to_all_scales(reading.celsius)
        log.info("weather_resolved", city=city, temp_c=scales.celsius)
        return ComposedResponse.compose(city=city, scales=scales)


# --- Module Notes -----------------------------------------------------------
# States: received -> validated -> location resolved -> weather resolved -> composed.
# Every failure leaves via an exception raised at the step that classified it.
