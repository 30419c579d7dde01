"""
Exception handlers for the Event Manager Service.

Every error leaves the API with the same body shape:
``{timestamp, status, error, message}``, plus ``exception`` and ``cause`` for
unexpected failures.
"""

import logging
from datetime import datetime
from http import HTTPStatus
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.exceptions import ErrorKind, ServiceError

logger = logging.getLogger(__name__)


def build_error_body(
    status_code: int,
    error: str,
    message: str,
    exception: Optional[str] = None,
    cause: Optional[str] = None
) -> dict:
    """Build the uniform error body."""
    body = {
        "timestamp": datetime.now().isoformat(),
        "status": status_code,
        "error": error,
        "message": message,
    }
    if exception is not None:
        body["exception"] = exception
    if cause is not None:
        body["cause"] = cause
    return body


def error_response(kind: ErrorKind, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=kind.status_code,
        content=build_error_body(kind.status_code, kind.reason, message)
    )


async def service_error_handler(request: Request, exc: ServiceError):
    """Map a domain error to its HTTP status."""
    logger.warning(f"{exc.kind.code} on {request.method} {request.url.path}: {exc.message}")
    return error_response(exc.kind, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed or missing request fields as 400."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))

    message = "; ".join(problems) or "Invalid request"
    logger.warning(f"Validation failed on {request.method} {request.url.path}: {message}")
    return error_response(ErrorKind.VALIDATION, message)


async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Unique constraint hit in the database: report which field collided."""
    logger.warning(f"Duplicate resource rejected by the database: {exc.orig}")

    detail = str(exc.orig).lower()
    if "email" in detail:
        message = "User with this email already exists"
    elif "username" in detail:
        message = "User with this username already exists"
    else:
        message = "Resource already exists"

    return error_response(ErrorKind.ALREADY_EXISTS, message)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Keep framework errors such as unknown routes in the uniform shape."""
    try:
        reason = HTTPStatus(exc.status_code).phrase
    except ValueError:
        reason = "Error"
    return JSONResponse(
        status_code=exc.status_code,
        content=build_error_body(exc.status_code, reason, str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    cause = exc.__cause__
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=build_error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            str(exc),
            exception=type(exc).__name__,
            cause=str(cause) if cause is not None else None
        )
    )


def register_exception_handlers(app: FastAPI):
    """Install every handler on ``app``."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
