"""
Client-visible error taxonomy and FastAPI exception handlers.

Every failure leaving the API resolves to one of a small set of kinds,
each with a stable machine-readable code:

    VALIDATION_ERROR  422  malformed or missing input
    UNAUTHORIZED      401  write attempted without a session
    FORBIDDEN         403  session role below the required role
    NOT_FOUND         404  referenced entity absent
    UNAVAILABLE       503  no storage connection
    INTERNAL          500  anything else

Storage driver messages never cross this boundary: handlers only render
the message carried by an AppError, and unknown exceptions get a fixed text.
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors that map to a client-visible error kind."""

    code: str = "INTERNAL"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: list[dict[str, Any]] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationFailedError(AppError):
    code = "VALIDATION_ERROR"
    status_code = 422
    default_message = "Invalid input"


class UnauthorizedError(AppError):
    code = "UNAUTHORIZED"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Please login"


class ForbiddenError(AppError):
    code = "FORBIDDEN"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class NotFoundError(AppError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StorageUnavailableError(AppError):
    code = "UNAVAILABLE"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Database not available"


class InternalError(AppError):
    pass


def _error_body(code: str, message: str, details: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": code, "message": message}
    if details:
        body["details"] = details
    return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an AppError with its own code and message."""
    if exc.status_code >= 500:
        logger.warning(
            "Request failed",
            path=request.url.path,
            error_code=exc.code,
            error=exc.message,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.code, exc.message, exc.details),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as VALIDATION_ERROR."""
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", ""),
            "code": err.get("type"),
        }
        for err in exc.errors()
    ]
    return await app_error_handler(request, ValidationFailedError(details=jsonable_encoder(details)))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the exception, return a generic INTERNAL error."""
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("INTERNAL", "Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error taxonomy handlers to an application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
