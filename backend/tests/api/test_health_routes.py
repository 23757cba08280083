"""Health routes — liveness always up, readiness tied to the task registry."""

import pytest
from httpx import ASGITransport, AsyncClient

from jobrunner.main import app
from jobrunner.services.task_dispatch import TaskDispatcher
from jobrunner.services.task_registry import TaskRegistry
from jobrunner.services.task_runtime import get_dispatcher


@pytest.mark.asyncio
async def test_liveness(client):
    resp = await client.get("/api/v1/health/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_ready_with_tasks(client):
    resp = await client.get("/api/v1/health/ready")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ready", "checks": {"tasks": 3}}


@pytest.mark.asyncio
async def test_not_ready_without_tasks():
    app.dependency_overrides[get_dispatcher] = lambda: TaskDispatcher(TaskRegistry())
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test",
        ) as c:
            resp = await c.get("/api/v1/health/ready")
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 503
    assert resp.json()["reason"] == "no_tasks_registered"
