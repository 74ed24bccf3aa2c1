"""API exceptions and the handlers that render them as failure envelopes.

Every failure leaves the service as::

    {"success": false, "message": "...", ...metadata}

with the HTTP status carried by the exception.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.responses import error_response

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base exception for API failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
        error: Any = None,
    ):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.metadata = metadata or {}
        self.error = error
        super().__init__(self.message)


class BadRequestError(ApiError):
    """Client-side validation failure (400)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class UnauthorizedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(ApiError):
    """Request conflicts with the current state (409)."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"

    def __init__(self, message: Optional[str] = None, metadata: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            metadata=metadata,
            error={
                "code": "CONFLICT",
                "message": "The request conflicts with the current state of the server",
            },
        )


class BackendError(ApiError):
    """A database call was rejected; carries the backend's own message."""

    def __init__(self, exc: Exception, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(backend_message(exc), status_code=status_code, error=exc)


def backend_message(exc: Exception) -> str:
    """Message forwarded to clients for a failed database call."""
    if not settings.EXPOSE_BACKEND_ERRORS:
        return "Database request failed"
    # DBAPI errors wrap the driver exception, whose text is the useful part
    return str(getattr(exc, "orig", None) or exc)


@contextmanager
def forward_backend_errors(db: Session, status_code: int = status.HTTP_400_BAD_REQUEST):
    """Roll back and re-raise database failures as :class:`BackendError`."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("Database call failed: %s", exc)
        raise BackendError(exc, status_code=status_code) from exc


def _debug_details(error: Any) -> Dict[str, Any]:
    if settings.DEBUG and error is not None:
        return {"error": error if isinstance(error, dict) else repr(error)}
    return {}


async def api_error_handler(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        logger.error("[API Error %s] %s %s: %s", exc.status_code, request.method, request.url.path, exc.message)
    else:
        logger.info("[API Error %s] %s %s: %s", exc.status_code, request.method, request.url.path, exc.message)
    extra = dict(exc.metadata)
    if isinstance(exc, ConflictError):
        extra["error"] = exc.error
    else:
        extra.update(_debug_details(exc.error))
    return error_response(exc.message, exc.status_code, **extra)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return error_response(
        "Invalid request payload",
        status.HTTP_400_BAD_REQUEST,
        errors=jsonable_encoder(exc.errors()),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(str(exc.detail), exc.status_code)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR, **_debug_details(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
