"""FastAPI dependencies that bridge HTTP requests to the auth and access layers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from dms_api.api.deps import SessionDep, SettingsDep
from dms_api.core.access import Caller, resolve_effective_role
from dms_api.models import User

from ..auth import AuthenticationError, parse_bearer


async def get_current_user(
    request: Request,
    db: SessionDep,
    settings: SettingsDep,
) -> User:
    """Resolve the bearer token to a user, or raise ``AuthenticationError``."""

    from dms_api.features.auth.service import AuthService

    token = parse_bearer(request.headers.get("authorization"))
    if token is None:
        raise AuthenticationError("Unauthenticated.")

    service = AuthService(session=db, settings=settings)
    user, access_token = await service.resolve_token(token)
    request.state.access_token_id = access_token.id
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def require_authenticated(user: CurrentUser) -> User:
    return user


def get_current_caller(user: CurrentUser) -> Caller:
    """Build the explicit caller identity handed to policy and query code.

    Resolving the effective role here surfaces ``InvalidRoleState`` before any
    feature code runs.
    """

    caller = user.to_caller()
    resolve_effective_role(caller.roles)
    return caller


CallerDep = Annotated[Caller, Depends(get_current_caller)]


def get_current_token_id(request: Request, _user: CurrentUser) -> int:
    return request.state.access_token_id


CurrentTokenId = Annotated[int, Depends(get_current_token_id)]


__all__ = [
    "CallerDep",
    "CurrentTokenId",
    "CurrentUser",
    "get_current_caller",
    "get_current_token_id",
    "get_current_user",
    "require_authenticated",
]
