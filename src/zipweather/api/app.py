"""
zipweather.api.app

FastAPI app factories for the entry and resolution services.

Responsibilities:
- Build the FastAPI application for the configured role and register routers/middleware.
- Own the explicit tracing instance (no OpenTelemetry globals) and the pooled http client.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import httpx
from fastapi import APIRouter, FastAPI
from opentelemetry.sdk.trace import TracerProvider

from zipweather import __version__
from zipweather.api.errors import register_error_handlers
from zipweather.api.routers.entry import router as entry_router
from zipweather.api.routers.health import router as health_router
from zipweather.api.routers.resolution import router as resolution_router
from zipweather.clients.location import LocationClient
from zipweather.clients.resolution import ResolutionClient
from zipweather.clients.weather import WeatherClient
from zipweather.observability.logging import configure_logging, get_logger
from zipweather.observability.middleware import RequestContextMiddleware
from zipweather.observability.tracing import Tracing, build_tracer_provider
from zipweather.services.entry_service import EntryService
from zipweather.services.resolution_service import ResolutionService
from zipweather.settings import Settings

log = get_logger(__name__)

ServiceWiring = Callable[[FastAPI, Settings, httpx.AsyncClient, Tracing], None]


def _wire_entry(
    app: FastAPI, settings: Settings, http: httpx.AsyncClient, tracing: Tracing
) -> None:
    downstream = ResolutionClient(settings=settings, http=http, tracing=tracing)
    app.state.entry_service = EntryService(downstream=downstream)


def _wire_resolution(
    app: FastAPI, settings: Settings, http: httpx.AsyncClient, tracing: Tracing
) -> None:
    app.state.resolution_service = ResolutionService(
        location=LocationClient(settings=settings, http=http, tracing=tracing),
        weather=WeatherClient(settings=settings, http=http, tracing=tracing),
    )


_ROLES: dict[str, tuple[str, APIRouter, ServiceWiring]] = {
    "entry": ("Zipcode Weather Entry Service", entry_router, _wire_entry),
    "resolution": ("Zipcode Weather Resolution Service", resolution_router, _wire_resolution),
}


def create_app(
    *,
    settings: Settings,
    tracer_provider: TracerProvider | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build the app for `settings.role`.

    `tracer_provider` and `transport` exist for composition in tests (in-memory span
    export, routing the entry hop into an in-process resolution app).
    """

    configure_logging(
        service_name=settings.service_name, role=settings.role, level=settings.log_level
    )

    # Exporter construction failures are fatal here, before any traffic is served.
    tracing = Tracing(provider=tracer_provider or build_tracer_provider(settings))
    title, router, wire = _ROLES[settings.role]

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, role=settings.role)
        # One pooled client per process; certificate verification stays on.
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout_seconds),
            transport=transport,
        ) as http:
            wire(app, settings, http, tracing)
            try:
                yield
            finally:
                # Flush pending spans to the collector.
                tracing.shutdown()
                log.info("shutdown")

    app = FastAPI(
        title=title,
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.tracing = tracing

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(router)
    return app


# --- Module Notes -----------------------------------------------------------
# Both services share this factory; only the router and the service wiring differ.
