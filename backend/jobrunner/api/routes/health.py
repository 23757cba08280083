"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if no task is registered (readiness)
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from jobrunner.services.task_dispatch import TaskDispatcher
from jobrunner.services.task_runtime import get_dispatcher

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "jobrunner-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(dispatcher: TaskDispatcher = Depends(get_dispatcher)):
    """Readiness check — the registry must hold at least one task."""
    task_count = len(dispatcher.registry)
    if not task_count:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "no_tasks_registered",
            },
        )
    return {"status": "ready", "checks": {"tasks": task_count}}
