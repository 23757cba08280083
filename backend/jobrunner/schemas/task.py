"""Task Schemas — Pydantic models for the task API boundary.

Invariants:
    - TaskRun.invoke_target: stripped, non-empty, bounded length
    - TaskRunResponse always carries the boolean outcome; failures are not HTTP errors

Design Decisions:
    - Length bound checked in a validator against settings, not a Field literal,
      so it follows MAX_INVOKE_TARGET_LENGTH
"""

from pydantic import BaseModel, Field, field_validator

from jobrunner.config import get_settings
from jobrunner.core.domain_types import DispatchState


class TaskInfo(BaseModel):
    """One registered task."""
    name: str
    description: str = ""


class TaskRun(BaseModel):
    """Run request — one invocation string."""
    invoke_target: str = Field(min_length=1)

    @field_validator("invoke_target")
    @classmethod
    def check_invoke_target(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("invoke_target cannot be empty or whitespace")
        limit = get_settings().max_invoke_target_length
        if len(v) > limit:
            raise ValueError(f"invoke_target longer than {limit} characters")
        return v


class TaskRunResponse(BaseModel):
    """Run outcome — success flag plus terminal dispatch state."""
    invoke_target: str
    success: bool
    task_name: str | None = None
    state: DispatchState
    error_code: str | None = None
