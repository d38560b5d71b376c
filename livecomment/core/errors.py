"""Error taxonomy shared by every livecomment module.

Services raise these exceptions; the handlers registered by
``register_exception_handlers`` turn them into a uniform JSON body::

    {"error": {"code": "...", "message": "...", "details": {...}}}

Nothing in the pipeline retries. A raised error aborts the operation and the
request's session rolls back.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from livecomment.core.logging import log_error, log_warning

logger = logging.getLogger(__name__)


class LivecommentError(Exception):
    """Base exception for livecomment errors."""

    error_code = "INTERNAL"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class UnauthenticatedError(LivecommentError):
    """No session, an undecodable one, or an expired one."""

    error_code = "UNAUTHENTICATED"
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(LivecommentError):
    """Authenticated, but not allowed to perform the operation."""

    error_code = "FORBIDDEN"
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(LivecommentError):
    """A referenced stream, comment or report does not exist."""

    error_code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidArgumentError(LivecommentError):
    """Malformed input such as a negative limit."""

    error_code = "INVALID_ARGUMENT"
    status_code = status.HTTP_400_BAD_REQUEST


class RejectedError(LivecommentError):
    """A comment was refused by the stream's NG word policy."""

    error_code = "REJECTED"
    status_code = status.HTTP_400_BAD_REQUEST


class ConstraintViolationError(LivecommentError):
    """The store refused a write because a referenced row is missing."""

    error_code = "CONSTRAINT_VIOLATION"
    status_code = status.HTTP_409_CONFLICT


class InternalError(LivecommentError):
    """Store failure or an unexpected state."""


class ConsistencyError(InternalError):
    """A row disappeared between lookup and response assembly."""


class FallbackAvatarError(InternalError):
    """The fallback avatar image could not be read."""


# Only produced by the framework; no service raises it
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"


def _error_body(code: str, message: str, details: Optional[dict] = None) -> dict:
    return {"error": {"code": code, "message": message, "details": details or {}}}


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the livecomment error handlers to ``app``."""

    @app.exception_handler(LivecommentError)
    async def livecomment_error_handler(request: Request, exc: LivecommentError):
        if exc.status_code >= 500:
            log_error(logger, exc.message, exception=exc, path=request.url.path)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error_code, exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_errors(exc)
        log_warning(logger, "Request validation failed", path=request.url.path, errors=errors)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(
                InvalidArgumentError.error_code,
                "Validation Error",
                {"errors": errors},
            ),
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        log_error(logger, "Store operation failed", exception=exc, path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(InternalError.error_code, "Internal Server Error"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        code = http_error_code(exc.status_code)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        log_error(logger, "Unhandled exception", exception=exc, path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(InternalError.error_code, "Internal Server Error"),
        )


def http_error_code(status_code: int) -> str:
    """Error code for a framework-raised HTTP error such as an unknown route."""
    if status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return METHOD_NOT_ALLOWED
    known = {
        status.HTTP_400_BAD_REQUEST: InvalidArgumentError.error_code,
        status.HTTP_401_UNAUTHORIZED: UnauthenticatedError.error_code,
        status.HTTP_403_FORBIDDEN: ForbiddenError.error_code,
        status.HTTP_404_NOT_FOUND: NotFoundError.error_code,
        status.HTTP_409_CONFLICT: ConstraintViolationError.error_code,
    }
    if status_code in known:
        return known[status_code]
    if status_code < 500:
        return InvalidArgumentError.error_code
    return InternalError.error_code


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Strip non-serializable context from pydantic validation errors."""
    errors = []
    for error in exc.errors():
        errors.append({
            "loc": list(error.get("loc", ())),
            "msg": error.get("msg"),
            "type": error.get("type"),
        })
    return errors
