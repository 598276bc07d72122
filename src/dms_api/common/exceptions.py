"""Centralized FastAPI exception handlers with structured logging.

Error bodies carry both ``detail`` (FastAPI convention) and ``message`` (a
single human-readable sentence the web client displays).
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dms_api.common.logging import log_context

_UNHANDLED_LOGGER = logging.getLogger("dms_api.errors")
_HTTP_LOGGER = logging.getLogger("dms_api.http")

VALIDATION_MESSAGE = "The given data was invalid."


class FieldValidationError(Exception):
    """Input failed a check that needs the database or business rules.

    Rendered as 422 in the same ``[{loc, msg, type}]`` shape FastAPI uses for
    request-shape errors.
    """

    def __init__(self, field: str, message: str, *, location: str = "body") -> None:
        super().__init__(message)
        self._errors: list[dict[str, Any]] = [
            {"loc": [location, field], "msg": message, "type": "value_error"}
        ]

    @classmethod
    def from_errors(cls, errors: list[dict[str, Any]]) -> FieldValidationError:
        if not errors:
            raise ValueError("At least one error is required")
        first = errors[0]
        exc = cls(str(first["loc"][-1]), first["msg"], location=str(first["loc"][0]))
        exc._errors = [
            {"loc": list(item["loc"]), "msg": item["msg"], "type": item.get("type", "value_error")}
            for item in errors
        ]
        return exc

    @property
    def fields(self) -> list[str]:
        return [str(item["loc"][-1]) for item in self._errors]

    def errors(self) -> list[dict[str, Any]]:
        return list(self._errors)


def error_body(detail: Any) -> dict[str, Any]:
    """Return the JSON body used for every error response."""

    if isinstance(detail, str):
        return {"message": detail, "detail": detail}
    return {"message": VALIDATION_MESSAGE, "detail": jsonable_encoder(detail)}


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler: HTTP 500 plus an ERROR log with stack trace."""

    _UNHANDLED_LOGGER.exception(
        "unhandled_exception",
        extra=log_context(
            path=str(request.url.path),
            method=request.method,
            exception_type=type(exc).__name__,
            detail=str(exc),
        ),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Server Error", "detail": "Internal server error"},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPException; 5xx responses are logged, 4xx are not."""

    if exc.status_code >= 500:
        _HTTP_LOGGER.error(
            "http_exception",
            extra=log_context(
                path=str(request.url.path),
                method=request.method,
                status_code=exc.status_code,
                detail=exc.detail,
            ),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {key: value for key, value in error.items() if key in {"loc", "msg", "type"}}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body(errors),
    )


async def field_validation_exception_handler(
    request: Request, exc: FieldValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body(exc.errors()),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(FieldValidationError, field_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "FieldValidationError",
    "VALIDATION_MESSAGE",
    "error_body",
    "field_validation_exception_handler",
    "http_exception_handler",
    "register_exception_handlers",
    "unhandled_exception_handler",
    "validation_exception_handler",
]
