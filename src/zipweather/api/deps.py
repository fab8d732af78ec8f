"""
zipweather.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Expose the per-app settings, tracing and services stored on `app.state`.
"""

from __future__ import annotations

from fastapi import Request

from zipweather.observability.tracing import Tracing
from zipweather.services.entry_service import EntryService
from zipweather.services.resolution_service import ResolutionService
from zipweather.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Settings are bound at app creation so tests can inject their own instance.
    return request.app.state.settings  # type: ignore[attr-defined]


def tracing_dep(request: Request) -> Tracing:
    return request.app.state.tracing  # type: ignore[attr-defined]


def entry_service_dep(request: Request) -> EntryService:
    # Created in the app lifespan together with the pooled http client.
    return request.app.state.entry_service  # type: ignore[attr-defined]


def resolution_service_dep(request: Request) -> ResolutionService:
    return request.app.state.resolution_service  # type: ignore[attr-defined]


# --- Module Notes -----------------------------------------------------------
# Services are wired at lifespan start; these accessors fail loudly if called before that.
