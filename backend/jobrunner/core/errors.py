"""Error Hierarchy — typed, categorized exceptions for every dispatch failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Dispatch errors never escape TaskDispatcher.execute; they are logged and
      folded into a boolean outcome
    - to_response() produces the REST envelope used by the API error handlers
    - No handler internals leaked in user-facing messages

Design Decisions:
    - Single hierarchy with JobRunnerError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    task_name: str | None = None
    invoke_target: str | None = None
    debug_info: dict[str, Any] | None = None


class JobRunnerError(Exception):
    """Base exception for all jobrunner errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "task_name": self.context.task_name,
                    "invoke_target": self.context.invoke_target,
                },
            }
        }


# ─── Invocation Errors (400-level) ──────────────────────────────

class InvocationFormatError(JobRunnerError):
    """Invocation string is not `name` or `name(args)`."""
    def __init__(self, invoke_target: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.invoke_target = invoke_target
        super().__init__(
            f"Invalid invocation format: {invoke_target!r}",
            "INVALID_INVOCATION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )


class ArgumentDecodeError(JobRunnerError):
    """Argument text is not a decodable literal list after normalization."""
    def __init__(
        self, reason: str, position: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Failed to parse arguments: {reason} at position {position}",
            "ARGUMENT_DECODE_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.reason = reason
        self.position = position


class TaskNotFoundError(JobRunnerError):
    """No task registered under the requested name."""
    def __init__(self, task_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.task_name = task_name
        super().__init__(
            f"Task '{task_name}' does not exist",
            "TASK_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


# ─── Execution Errors (500-level) ───────────────────────────────

class TaskExecutionError(JobRunnerError):
    """Task body raised. The original exception is chained as __cause__."""
    def __init__(
        self, task_name: str, error: BaseException,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.task_name = task_name
        super().__init__(
            f"Task '{task_name}' failed: {type(error).__name__}: {error}",
            "TASK_FAILED", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, ctx, 500,
        )


# ─── API Boundary Errors ────────────────────────────────────────

class InvalidRequestError(JobRunnerError):
    """Request body failed Pydantic validation. `details` lists field errors."""
    def __init__(
        self, details: list[dict[str, str]], context: ErrorContext | None = None,
    ):
        super().__init__(
            "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.details = details

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response


class InternalError(JobRunnerError):
    """Unhandled exception at the API edge. Never carries the original text."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An unexpected error occurred", "INTERNAL_ERROR",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL, context, 500,
        )
