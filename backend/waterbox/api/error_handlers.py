"""Error Handlers — turn registry failures into the JSON error envelope.

Invariants:
    - Rule and lookup failures (4xx) log at WARNING, infrastructure ones (5xx) at ERROR
    - Log lines carry the box / assignment / transfer ids from the error context
    - Request validation failures are 400 with one detail per offending field
    - An unexpected exception is a 500 whose body says nothing about the cause

Design Decisions:
    - Handlers are plain module functions registered with add_exception_handler,
      so tests can call them without building an app
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from waterbox.core.errors import ErrorCategory, ErrorSeverity, WaterBoxError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WaterBoxError, handle_registry_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


def _context_fields(exc: WaterBoxError) -> dict:
    ctx = exc.context
    fields = {
        "box_id": ctx.box_id,
        "assignment_id": ctx.assignment_id,
        "transfer_id": ctx.transfer_id,
        "caller_id": ctx.caller_id,
    }
    return {k: v for k, v in fields.items() if v is not None}


async def handle_registry_error(request: Request, exc: WaterBoxError):
    level = logging.WARNING if exc.http_status < 500 else logging.ERROR
    logger.log(
        level,
        f"{request.method} {request.url.path} -> {exc.http_status} {exc.code}: "
        f"{exc.message}",
        extra={
            "error_code": exc.code, "path": request.url.path,
            **_context_fields(exc),
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"{request.method} {request.url.path} rejected: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"{request.method} {request.url.path} failed unexpectedly",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )
