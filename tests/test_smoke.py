"""
tests.test_smoke

Minimal smoke tests: both services boot and answer their liveness probe.
"""

from __future__ import annotations

import pytest


@pytest.mark.asyncio
async def test_health_endpoints(serve, resolution_app, entry_app) -> None:
    async with serve(resolution_app) as client:
        r = await client.get("/healthz")
        assert r.status_code == 200
        assert r.json() == {"status": "ok", "role": "resolution"}
        assert r.headers["x-request-id"]

    async with serve(entry_app) as client:
        r = await client.get("/healthz", headers={"x-request-id": "req-123"})
        assert r.status_code == 200
        assert r.json()["role"] == "entry"
        assert r.headers["x-request-id"] == "req-123"


@pytest.mark.asyncio
async def test_entry_rejects_non_post(serve, entry_app) -> None:
    async with serve(entry_app) as client:
        r = await client.get("/zipcode")
        assert r.status_code == 405
