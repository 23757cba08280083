"""Error Handlers — every API failure rendered through the JobRunnerError envelope.

Invariants:
    - All error responses share JobRunnerError.to_response(): code, category,
      severity, timestamp, task/invoke context
    - Pydantic validation failures become InvalidRequestError (400) with
      field-level details; when the body carried an invoke_target it is echoed
      in the context
    - Anything else becomes InternalError (500); exception text stays in the log

Design Decisions:
    - Foreign exceptions are converted to domain errors first, then rendered by
      one function, so the envelope cannot drift between handlers
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from jobrunner.core.errors import (
    ErrorContext, InternalError, InvalidRequestError, JobRunnerError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(JobRunnerError, _handle_jobrunner_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


def render_error(exc: JobRunnerError) -> JSONResponse:
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _handle_jobrunner_error(
    request: Request, exc: JobRunnerError,
) -> JSONResponse:
    logger.error(
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "task_name": exc.context.task_name,
        },
    )
    return render_error(exc)


async def _handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    error = InvalidRequestError(
        details, ErrorContext(invoke_target=_submitted_invoke_target(exc)),
    )
    logger.warning(
        f"Validation error on {request.url.path}: {details}",
        extra={"error_code": error.code, "path": request.url.path},
    )
    return render_error(error)


async def _handle_unexpected_error(
    request: Request, exc: Exception,
) -> JSONResponse:
    error = InternalError()
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        extra={"error_code": error.code, "path": request.url.path},
        exc_info=True,
    )
    return render_error(error)


def _submitted_invoke_target(exc: RequestValidationError) -> str | None:
    body = getattr(exc, "body", None)
    if isinstance(body, dict) and isinstance(body.get("invoke_target"), str):
        return body["invoke_target"]
    return None
