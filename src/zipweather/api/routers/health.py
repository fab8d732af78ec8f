"""
zipweather.api.routers.health

Liveness endpoint (`/healthz`), mounted on both services.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from zipweather.api.deps import settings_dep
from zipweather.settings import Settings

router = APIRouter()


@router.get("/healthz")
async def healthz(settings: Settings = Depends(settings_dep)) -> dict[str, str]:
    # Liveness only: providers are external and not probed here.
    return {"status": "ok", "role": settings.role}


# --- Module Notes -----------------------------------------------------------
# Both services expose the same probe so one container healthcheck fits either role.
