"""Exception handlers that translate auth and access errors to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from dms_api.common.exceptions import error_body
from dms_api.common.logging import log_context

from ..access import InvalidRoleState
from ..auth.errors import AuthenticationError, PermissionDeniedError

logger = logging.getLogger("dms_api.errors")


def _handle_authentication_error(_request: Request, exc: AuthenticationError) -> JSONResponse:
    """Translate auth failures into HTTP 401 responses."""

    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=error_body(str(exc) or "Unauthenticated."),
        headers={"WWW-Authenticate": "Bearer"},
    )


def _handle_permission_error(_request: Request, exc: PermissionDeniedError) -> JSONResponse:
    """Translate permission denials into HTTP 403 responses."""

    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content=error_body(exc.message),
    )


def _handle_invalid_role_state(request: Request, exc: InvalidRoleState) -> JSONResponse:
    token_id = getattr(request.state, "access_token_id", None)
    logger.error(
        "auth.role.invalid_state",
        extra=log_context(path=request.url.path, access_token_id=token_id, detail=str(exc)),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Server Error", "detail": "Internal server error"},
    )


def register_auth_exception_handlers(app: FastAPI) -> None:
    """Attach auth/access handlers to the FastAPI app."""

    app.add_exception_handler(AuthenticationError, _handle_authentication_error)
    app.add_exception_handler(PermissionDeniedError, _handle_permission_error)
    app.add_exception_handler(InvalidRoleState, _handle_invalid_role_state)


__all__ = ["register_auth_exception_handlers"]
