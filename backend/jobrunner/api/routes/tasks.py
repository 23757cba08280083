"""Task Routes — list, describe and run registered tasks from invocation strings.

Invariants:
    - POST /run always answers 200 with the boolean outcome; dispatch failures
      are never raised as HTTP errors (details go to the log only)
    - Request bodies validated by Pydantic before reaching the handler
    - GET /{task_name} raises TaskNotFoundError -> 404 via the global handler

Design Decisions:
    - Dispatcher obtained via Depends(get_dispatcher): overridable in tests
"""

import logging

from fastapi import APIRouter, Depends

from jobrunner.core.errors import TaskNotFoundError
from jobrunner.schemas.task import TaskInfo, TaskRun, TaskRunResponse
from jobrunner.services.task_dispatch import TaskDispatcher
from jobrunner.services.task_runtime import get_dispatcher

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskInfo])
async def list_tasks(dispatcher: TaskDispatcher = Depends(get_dispatcher)):
    """All registered tasks, in registration order."""
    return [
        TaskInfo(name=d.name, description=d.description)
        for d in dispatcher.registry.descriptors()
    ]


@router.get("/{task_name}", response_model=TaskInfo)
async def get_task(
    task_name: str, dispatcher: TaskDispatcher = Depends(get_dispatcher),
):
    """One registered task, or 404 TASK_NOT_FOUND."""
    descriptor = dispatcher.registry.lookup(task_name)
    if descriptor is None:
        raise TaskNotFoundError(task_name)
    return TaskInfo(name=descriptor.name, description=descriptor.description)


@router.post("/run", response_model=TaskRunResponse)
async def run_task(
    body: TaskRun, dispatcher: TaskDispatcher = Depends(get_dispatcher),
):
    """Execute one invocation string and report the outcome."""
    result = await dispatcher.execute_detailed(body.invoke_target)
    return TaskRunResponse(
        invoke_target=result.invoke_target,
        success=result.success,
        task_name=result.task_name,
        state=result.state,
        error_code=result.error_code,
    )
