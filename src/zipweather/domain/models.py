"""
zipweather.domain.models

Wire models for the service surfaces and the provider contracts.

Responsibilities:
- Entry request body (`{"cep": ...}`) and the composed response shape.
- Decoding models for the locality and weather provider payloads.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from zipweather.domain.conversion import TemperatureScales


class ZipCodeRequest(BaseModel):
    # Missing `cep` decodes to "" so the validator (not the body parser) rejects it.
    cep: str = ""


class ComposedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    city: str
    temp_c: float = Field(alias="temp_C")
    temp_f: float = Field(alias="temp_F")
    temp_k: float = Field(alias="temp_K")

    @classmethod
    def compose(cls, *, city: str, scales: TemperatureScales) -> ComposedResponse:
        return cls(
            city=city,
            temp_c=scales.celsius,
            temp_f=scales.fahrenheit,
            temp_k=scales.kelvin,
        )


class LocationInfo(BaseModel):
    # Unknown codes come back as `{"erro": true}` (no key), an empty string or null.
    localidade: str | None = ""

    @field_validator("localidade", mode="before")
    @classmethod
    def _null_is_empty(cls, v: object) -> object:
        return "" if v is None else v


class CurrentWeather(BaseModel):
    temp_c: float


class WeatherReading(BaseModel):
    current: CurrentWeather

    @property
    def celsius(self) -> float:
        return self.current.temp_c


class ErrorBody(BaseModel):
    error: str
    message: str


# --- Module Notes -----------------------------------------------------------
# `ComposedResponse` is both produced by the resolution service and decoded by the
# entry service when relaying, so the aliases are the single source of field names.
