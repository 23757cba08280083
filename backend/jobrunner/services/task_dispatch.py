"""Task Dispatch — parse -> lookup -> invoke, folded into a boolean outcome.

Invariants:
    - execute() never raises for a bad invocation, a missing task or a failing
      handler; every failure is logged once at ERROR and returns False
    - True only when the handler was awaited to completion without raising
    - Unknown tasks never invoke any handler
    - Registry is injected and only read here; concurrent execute() calls share
      nothing else
    - No timeout: a hung handler hangs the awaiting caller

Design Decisions:
    - Argument decode failures follow strict_argument_decoding:
      False (default) -> logged, task runs with zero arguments
      True            -> logged, invocation fails as PARSE_FAILED
    - execute_detailed() exposes the terminal DispatchState for the API and
      tests; execute() is the boolean contract on top of it
    - Catches Exception, not BaseException: cancellation of the caller's own
      await still propagates
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from jobrunner.core.domain_types import DispatchState, TaskName
from jobrunner.core.errors import (
    ArgumentDecodeError, ErrorContext, JobRunnerError, TaskExecutionError,
    TaskNotFoundError,
)
from jobrunner.core.invocation_parser import (
    decode_arguments, format_invocation, parse_invocation,
)
from jobrunner.services.task_registry import TaskRegistry

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Outcome of one execute call. Detailed error text stays in the log."""
    invoke_target: str
    state: DispatchState = DispatchState.IDLE
    task_name: TaskName | None = None
    args: list[Any] = field(default_factory=list)
    error_code: str | None = None
    argument_error: str | None = None

    @property
    def success(self) -> bool:
        return self.state is DispatchState.COMPLETED


class TaskDispatcher:
    """Routes invocation strings to registry handlers."""

    def __init__(
        self, registry: TaskRegistry, strict_argument_decoding: bool = False,
    ):
        self._registry = registry
        self._strict_argument_decoding = strict_argument_decoding

    @property
    def registry(self) -> TaskRegistry:
        return self._registry

    def get_tasks(self) -> list[str]:
        return self._registry.list_tasks()

    async def execute(self, invoke_target: str) -> bool:
        """Run the task named by invoke_target. Returns True on success."""
        result = await self.execute_detailed(invoke_target)
        return result.success

    async def execute_detailed(self, invoke_target: str) -> DispatchResult:
        result = DispatchResult(invoke_target=invoke_target)

        result.state = DispatchState.PARSING
        try:
            request = parse_invocation(invoke_target)
            result.task_name = request.name
            result.args = self._decode(request.raw_args, result)
        except JobRunnerError as e:
            return self._fail(result, DispatchState.PARSE_FAILED, e)
        result.state = DispatchState.PARSED

        result.state = DispatchState.LOOKUP
        descriptor = self._registry.lookup(request.name)
        if descriptor is None:
            return self._fail(
                result, DispatchState.NOT_FOUND,
                TaskNotFoundError(
                    request.name, ErrorContext(invoke_target=invoke_target),
                ),
            )
        result.state = DispatchState.FOUND

        result.state = DispatchState.INVOKING
        logger.info(
            f"Executing task: {_describe_call(descriptor.name, result.args)}",
            extra={"task_name": descriptor.name, "invoke_target": invoke_target},
        )
        try:
            await descriptor.handler(*result.args)
        except Exception as exc:
            error = TaskExecutionError(
                descriptor.name, exc, ErrorContext(invoke_target=invoke_target),
            )
            error.__cause__ = exc
            return self._fail(result, DispatchState.FAULTED, error, exc_info=exc)

        result.state = DispatchState.COMPLETED
        logger.info(
            f"Task completed: {descriptor.name}",
            extra={"task_name": descriptor.name},
        )
        return result

    def _decode(self, raw_args: str | None, result: DispatchResult) -> list[Any]:
        try:
            return decode_arguments(raw_args)
        except ArgumentDecodeError as e:
            if self._strict_argument_decoding:
                raise
            result.argument_error = e.code
            logger.error(
                f"{e.message} — running '{result.task_name}' without arguments",
                extra={
                    "task_name": result.task_name,
                    "invoke_target": result.invoke_target,
                    "error_code": e.code,
                },
            )
            return []

    def _fail(
        self,
        result: DispatchResult,
        state: DispatchState,
        error: JobRunnerError,
        exc_info: BaseException | None = None,
    ) -> DispatchResult:
        result.state = state
        result.error_code = error.code
        logger.error(
            f"Task execution failed: {error.message}",
            extra={
                "task_name": result.task_name,
                "invoke_target": result.invoke_target,
                "error_code": error.code,
            },
            exc_info=exc_info,
        )
        return result


def _describe_call(name: str, args: list[Any]) -> str:
    try:
        return format_invocation(name, args)
    except ValueError:
        return f"{name}(<{len(args)} args>)"
