"""jobrunner API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map JobRunnerError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Task registry built on startup, before any request is dispatched

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobrunner.api.error_handlers import register_error_handlers
from jobrunner.api.routes import health, tasks
from jobrunner.config import get_settings
from jobrunner.infrastructure.observability import setup_logging
from jobrunner.services.task_runtime import get_dispatcher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    dispatcher = get_dispatcher()
    logger.info(f"jobrunner API started with {len(dispatcher.get_tasks())} tasks")
    yield
    logger.info("jobrunner API shutting down")


app = FastAPI(
    title="jobrunner API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(tasks.router)

register_error_handlers(app)
