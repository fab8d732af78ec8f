"""
tests.conftest

Shared fixtures: per-service settings, in-memory span capture and in-process app wiring.

The entry app's http client is routed into the resolution app through
`httpx.ASGITransport`, so two-hop requests never leave the test process; the
external providers are mocked with respx inside each test.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import AsyncExitStack, asynccontextmanager
from dataclasses import dataclass, field

import httpx
import pytest
from fastapi import FastAPI
from opentelemetry.sdk.trace import ReadableSpan, TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from zipweather.api.app import create_app
from zipweather.settings import Settings

LOCATION_BASE_URL = "https://cep.test/ws"
WEATHER_API_URL = "https://weather.test/v1/current.json"
WEATHER_API_KEY = "weather-secret-key"
RESOLUTION_SERVICE_URL = "http://resolution.test"


@dataclass
class CapturedSpans:
    exporter: InMemorySpanExporter = field(default_factory=InMemorySpanExporter)
    provider: TracerProvider = field(default_factory=TracerProvider)

    def __post_init__(self) -> None:
        self.provider.add_span_processor(SimpleSpanProcessor(self.exporter))

    def all(self) -> list[ReadableSpan]:
        return list(self.exporter.get_finished_spans())

    def named(self, name: str) -> ReadableSpan:
        matches = [s for s in self.all() if s.name == name]
        assert len(matches) == 1, f"expected one span {name!r}, got {[s.name for s in self.all()]}"
        return matches[0]

    def names(self) -> list[str]:
        return [s.name for s in self.all()]


@pytest.fixture
def entry_spans() -> CapturedSpans:
    return CapturedSpans()


@pytest.fixture
def resolution_spans() -> CapturedSpans:
    return CapturedSpans()


@pytest.fixture
def resolution_settings() -> Settings:
    return Settings(
        env="test",
        role="resolution",
        service_name="service-b",
        request_name="service-b-request",
        location_api_base_url=LOCATION_BASE_URL,
        weather_api_url=WEATHER_API_URL,
        weather_api_key=WEATHER_API_KEY,
    )


@pytest.fixture
def entry_settings() -> Settings:
    return Settings(
        env="test",
        role="entry",
        service_name="service-a",
        request_name="service-a-request",
        resolution_service_url=RESOLUTION_SERVICE_URL,
    )


@pytest.fixture
def resolution_app(resolution_settings: Settings, resolution_spans: CapturedSpans) -> FastAPI:
    return create_app(settings=resolution_settings, tracer_provider=resolution_spans.provider)


@pytest.fixture
def entry_app(
    entry_settings: Settings, entry_spans: CapturedSpans, resolution_app: FastAPI
) -> FastAPI:
    return create_app(
        settings=entry_settings,
        tracer_provider=entry_spans.provider,
        transport=httpx.ASGITransport(app=resolution_app),
    )


@pytest.fixture
def serve() -> Callable[..., AsyncIterator[httpx.AsyncClient]]:
    """
    Run the lifespans of `apps` (dependencies first) and yield a client for the last one.
    httpx's ASGITransport does not drive lifespan itself.
    """

    @asynccontextmanager
    async def _serve(*apps: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
        async with AsyncExitStack() as stack:
            for app in apps:
                await stack.enter_async_context(app.router.lifespan_context(app))
            client = await stack.enter_async_context(
                httpx.AsyncClient(
                    transport=httpx.ASGITransport(app=apps[-1]), base_url="http://test"
                )
            )
            yield client

    return _serve
