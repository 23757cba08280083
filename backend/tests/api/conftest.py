"""API test fixtures — FastAPI test client with an overridable dispatcher.

Invariants:
    - get_dispatcher dependency overridden per test with a fresh registry
    - Overrides cleared after each test

Design Decisions:
    - httpx.AsyncClient over ASGITransport: no lifespan, no network
"""

import pytest
from httpx import ASGITransport, AsyncClient
from unittest.mock import AsyncMock

from jobrunner.main import app
from jobrunner.services.task_dispatch import TaskDispatcher
from jobrunner.services.task_registry import TaskRegistry
from jobrunner.services.task_runtime import get_dispatcher


@pytest.fixture
def handlers():
    """Handlers registered in the test dispatcher, by task name."""
    return {
        "noParams": AsyncMock(),
        "params": AsyncMock(),
        "explode": AsyncMock(side_effect=RuntimeError("kaboom")),
    }


@pytest.fixture
def dispatcher(handlers):
    registry = TaskRegistry()
    for name, handler in handlers.items():
        registry.register_handler(name, handler, f"{name} task")
    return TaskDispatcher(registry)


@pytest.fixture
async def client(dispatcher):
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
