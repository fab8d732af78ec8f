"""
zipweather.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for both services.
- Accept the OpenTelemetry-style variable names used by the deployment.
- Hide secrets from repr/logging (e.g., weather API key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    One settings object serves both processes:
    - `role` picks the app (entry or resolution)
    - tracing fields are only used as span/resource attributes
    """

    model_config = SettingsConfigDict(
        env_prefix="ZIPWEATHER_",
        case_sensitive=False,
        populate_by_name=True,
    )

    env: Literal["dev", "test", "prod"] = "dev"
    role: Literal["entry", "resolution"] = "entry"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Tracing
    service_name: str = Field(
        default="zipweather",
        validation_alias=AliasChoices("ZIPWEATHER_SERVICE_NAME", "OTEL_SERVICE_NAME"),
    )
    otel_exporter_otlp_endpoint: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "ZIPWEATHER_OTEL_EXPORTER_OTLP_ENDPOINT", "OTEL_EXPORTER_OTLP_ENDPOINT"
        ),
    )
    request_name: str = Field(
        default="zipweather-request",
        validation_alias=AliasChoices("ZIPWEATHER_REQUEST_NAME", "REQUEST_NAME_OTEL"),
    )

    # Downstream hop (entry -> resolution)
    resolution_service_url: str = "http://service-b:8081"

    # External providers (resolution -> location/weather)
    location_api_base_url: str = "https://viacep.com.br/ws"
    weather_api_url: str = "https://api.weatherapi.com/v1/current.json"
    weather_api_key: str = Field(default="", repr=False)

    # Deadlines
    http_timeout_seconds: float = 5.0
    request_timeout_seconds: float = 15.0

    # Upper bound on provider error text relayed to callers.
    max_error_detail_chars: int = 200


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Both containers run the same image; only `ZIPWEATHER_ROLE` and the port differ.
