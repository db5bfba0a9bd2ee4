"""Error taxonomy and the JSON error boundary.

- ValidationError (400): field-level details, every violation at once.
- NotFoundError (404): entity id absent.
- InternalError (500): unexpected failure, generic message only.

install_exception_handlers() maps these (plus FastAPI's own request
validation and HTTPException) to ``{"error": ..., "details": [...]}`` bodies.
Anything else becomes a logged 500 without internal detail.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = structlog.get_logger(__name__)

_REQUEST_PARTS = ("body", "query", "path", "header", "cookie")


class AppError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: list[dict[str, Any]] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"

    def __init__(self, details: list[dict[str, Any]], message: str | None = None) -> None:
        super().__init__(message, details=details)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"

    def __init__(self, entity_type: str, entity_id: str) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{humanize(entity_type)} not found")


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def humanize(entity_type: str) -> str:
    """'RevenueProjection' -> 'Revenue projection'."""
    words = re.findall(r"[A-Z][a-z0-9]*|[a-z0-9]+", entity_type)
    if not words:
        return entity_type
    return " ".join([words[0]] + [w.lower() for w in words[1:]])


def format_error_details(errors: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Flatten Pydantic error dicts into ``{field, message, type}`` entries.

    The leading request part ("body", "query", ...) is dropped from the
    location so the field reads the way the client sent it.
    """
    details: list[dict[str, Any]] = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] in _REQUEST_PARTS:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "body"
        details.append(
            {
                "field": field,
                "message": str(err.get("msg", "Invalid value")),
                "type": str(err.get("type", "value_error")),
            }
        )
    return details


# ── Handlers ────────────────────────────────────────────────────────────────


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request.app_error", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": ValidationError.default_message,
            "details": format_error_details(exc.errors()),
        },
    )


async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "request.unhandled_exception",
        method=request.method,
        path=request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": InternalError.default_message},
    )


def install_exception_handlers(app: FastAPI) -> None:
    """Register the JSON error boundary on the application."""
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(HTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
