"""
zipweather.services.entry_service

Entry pipeline: parse body -> validate -> forward to the resolution service -> relay.
"""

from __future__ import annotations

from opentelemetry.context import Context
from pydantic import ValidationError

from zipweather.clients.resolution import ResolutionClient
from zipweather.domain.errors import INVALID_ZIPCODE_MESSAGE, BadRequest, InvalidInput
from zipweather.domain.models import ComposedResponse, ZipCodeRequest
from zipweather.domain.validation import is_valid_zipcode


def parse_request(body: bytes) -> ZipCodeRequest:
    try:
        return ZipCodeRequest.model_validate_json(body)
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        raise BadRequest(f"invalid request body: {first.get('msg', 'undecodable JSON')}") from e


class EntryService:
    def __init__(self, *, downstream: ResolutionClient) -> None:
        self._downstream = downstream

    async def forward(self, ctx: Context, body: bytes) -> ComposedResponse:
        request = parse_request(body)
        if not is_valid_zipcode(request.cep):
            raise InvalidInput(INVALID_ZIPCODE_MESSAGE)
        # The downstream classification is relayed as-is (see ResolutionClient).
        return await self._downstream.temperature_by_zipcode(ctx, request.cep)


# --- Module Notes -----------------------------------------------------------
# Body parsing happens here rather than in FastAPI so a malformed body maps to 400.
