"""HTTP-facing dependencies and error handlers."""

from .dependencies import (
    CallerDep,
    CurrentTokenId,
    CurrentUser,
    get_current_caller,
    get_current_user,
    require_authenticated,
)
from .errors import register_auth_exception_handlers

__all__ = [
    "CallerDep",
    "CurrentTokenId",
    "CurrentUser",
    "get_current_caller",
    "get_current_user",
    "register_auth_exception_handlers",
    "require_authenticated",
]
