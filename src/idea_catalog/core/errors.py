"""Error taxonomy and the JSON error envelope.

Every failure surfaced to a caller is one of the ``ApiError`` subclasses
below and is rendered as::

    {"success": false, "error": "<kind>", "message": "<text>", "field": "<name>"}

``field`` is only present for validation failures that can name the
offending input.
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

OPAQUE_INTERNAL_MESSAGE = "An unexpected error occurred"


class ApiError(HTTPException):
    """Base class for errors rendered with the error envelope."""

    kind = "ApiError"
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None, *, field: str | None = None) -> None:
        super().__init__(
            status_code=self.status_code_default,
            detail=message or self.default_message,
        )
        self.field = field

    @property
    def message(self) -> str:
        return str(self.detail)

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "success": False,
            "error": self.kind,
            "message": self.message,
        }
        if self.field:
            payload["field"] = self.field
        return payload


class ValidationError(ApiError):
    """Malformed input: bad id format, out-of-range length, invalid enum value."""

    kind = "ValidationError"
    status_code_default = status.HTTP_400_BAD_REQUEST
    default_message = "Bad Request"


class Unauthorized(ApiError):
    """No caller identity where one is required."""

    kind = "Unauthorized"
    status_code_default = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"

    def __init__(self, message: str | None = None, *, field: str | None = None) -> None:
        super().__init__(message, field=field)
        self.headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(ApiError):
    """Identity present but lacking the right (wrong author, wrong tier)."""

    kind = "Forbidden"
    status_code_default = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(ApiError):
    """Referenced id does not exist."""

    kind = "NotFound"
    status_code_default = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class InternalError(ApiError):
    """Store failures; the message returned to callers stays opaque."""

    kind = "InternalError"
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = OPAQUE_INTERNAL_MESSAGE


def _field_from_location(loc: tuple[object, ...]) -> str | None:
    # ("query", "limit") -> "limit"; ("body", "content") -> "content"
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or None


async def api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_payload(),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(
    _request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = _field_from_location(tuple(first.get("loc", ())))
    message = str(first.get("msg", "Invalid request"))
    if field:
        message = f"Invalid value for '{field}': {message}"
    return await api_error_handler(_request, ValidationError(message, field=field))


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "Store failure while handling %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return await api_error_handler(request, InternalError())


_ERRORS_BY_STATUS: dict[int, type[ApiError]] = {
    error_cls.status_code_default: error_cls
    for error_cls in (ValidationError, Unauthorized, Forbidden, NotFound, InternalError)
}


def _kind_for_status(status_code: int) -> str:
    error_cls = _ERRORS_BY_STATUS.get(status_code)
    if error_cls is not None:
        return error_cls.kind
    try:
        return HTTPStatus(status_code).phrase.replace(" ", "").replace("-", "")
    except ValueError:
        return "HTTPError"


async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework-raised HTTP errors (unknown route, wrong method) in the envelope."""
    payload = {
        "success": False,
        "error": _kind_for_status(exc.status_code),
        "message": str(exc.detail),
    }
    return JSONResponse(
        status_code=exc.status_code,
        content=payload,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error while handling %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return await api_error_handler(request, InternalError())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope-producing handlers on ``app``."""
    app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError,
        request_validation_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, store_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
