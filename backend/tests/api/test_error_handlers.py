"""Error Handlers — unexpected exceptions rendered as INTERNAL_ERROR envelopes."""

import pytest
from httpx import ASGITransport, AsyncClient
from unittest.mock import MagicMock

from jobrunner.main import app
from jobrunner.services.task_runtime import get_dispatcher


@pytest.mark.asyncio
async def test_unexpected_exception_becomes_internal_error():
    broken = MagicMock()
    broken.registry.descriptors.side_effect = RuntimeError("secret detail")
    app.dependency_overrides[get_dispatcher] = lambda: broken
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as c:
            resp = await c.get("/api/v1/tasks")
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 500
    error = resp.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["severity"] == "critical"
    assert "secret detail" not in resp.text
