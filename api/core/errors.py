"""API error kinds and the handlers that render them.

Every failure leaves the API in the same envelope:

    {"success": false, "error": {"code": 404, "message": "...", "details": ...}}

``code`` is the HTTP status. ``details`` and ``validation_errors`` are only
present when the error carries them.
"""

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logger import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP error envelope."""

    status_code: int = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.status_code, "message": self.message}
        if self.details:
            error["details"] = self.details
        return {"success": False, "error": error}


class ValidationError(ApiError):
    """A single field failed validation."""

    status_code = 400


class ValidationErrors(ApiError):
    """Several fields failed validation at once."""

    status_code = 400

    def __init__(self, errors: list[tuple[str, str]]):
        self.errors = errors
        super().__init__(", ".join(f"{field}: {msg}" for field, msg in errors))

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["error"]["validation_errors"] = [
            {"field": field, "message": msg} for field, msg in self.errors
        ]
        return body


class BadRequestError(ApiError):
    status_code = 400


class UnauthorizedError(ApiError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized access"):
        super().__init__(message)


class ForbiddenError(ApiError):
    status_code = 403

    def __init__(self, message: str = "Forbidden access"):
        super().__init__(message)


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409


class InternalServerError(ApiError):
    status_code = 500

    def __init__(self, message: str = "An internal server error occurred"):
        super().__init__(message)


class DatabaseError(ApiError):
    """Storage failure. The raw driver message is kept in ``details``."""

    status_code = 500

    def __init__(self, details: str):
        super().__init__("A database error occurred", details=details)


class SerializationError(ApiError):
    status_code = 400

    def __init__(self, details: str | None = None):
        super().__init__("Invalid data format", details=details)


def _field_name(loc: tuple[Any, ...]) -> str:
    """Drop the request section ("body", "query", ...) from a pydantic loc."""
    parts = [str(p) for p in loc]
    if parts and parts[0] in ("body", "query", "path", "header", "cookie"):
        parts = parts[1:]
    return ".".join(parts) or "body"


def _message(error: dict[str, Any]) -> str:
    msg = str(error.get("msg", "Invalid value"))
    # pydantic prefixes messages raised from custom validators
    return msg.removeprefix("Value error, ")


def from_request_validation(exc: RequestValidationError) -> ApiError:
    """Map FastAPI's request validation failure onto our error kinds."""
    errors = list(exc.errors())

    for error in errors:
        if error.get("type") == "json_invalid":
            ctx = error.get("ctx") or {}
            return SerializationError(str(ctx.get("error", error.get("msg"))))

    pairs = [(_field_name(tuple(e.get("loc", ()))), _message(e)) for e in errors]
    if len(pairs) == 1:
        field, msg = pairs[0]
        return ValidationError(f"{field}: {msg}")
    return ValidationErrors(pairs)


async def api_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, ApiError):
        return await unhandled_exception_handler(request, exc)

    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "request.api_error",
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
        error=exc.message,
        details=exc.details,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Render request validation failures as 400 envelopes instead of 422."""
    if not isinstance(exc, RequestValidationError):
        return await unhandled_exception_handler(request, exc)

    logger.warning(
        "request.validation_error",
        path=request.url.path,
        method=request.method,
        error_count=len(exc.errors()),
    )
    return await api_error_handler(request, from_request_validation(exc))


async def database_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Storage errors that escape the repositories (e.g. at commit)."""
    logger.error(
        "db.request.failed",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
    )
    return await api_error_handler(request, DatabaseError(str(exc)))


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Framework HTTP errors (unknown route, wrong method, 503 from /ready)."""
    if not isinstance(exc, StarletteHTTPException):
        return await unhandled_exception_handler(request, exc)

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": {"code": exc.status_code, "message": str(exc.detail)},
        },
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Last-resort handler for unhandled exceptions."""
    logger.exception(
        "unhandled.exception",
        exc_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
    )
    error = InternalServerError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


__all__ = [
    "ApiError",
    "BadRequestError",
    "ConflictError",
    "DatabaseError",
    "ForbiddenError",
    "InternalServerError",
    "NotFoundError",
    "SerializationError",
    "UnauthorizedError",
    "ValidationError",
    "ValidationErrors",
    "api_error_handler",
    "database_exception_handler",
    "from_request_validation",
    "http_exception_handler",
    "unhandled_exception_handler",
    "validation_exception_handler",
]
