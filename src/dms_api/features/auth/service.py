"""Password authentication and opaque bearer-token sessions."""

from __future__ import annotations

import logging
from functools import lru_cache

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dms_api.common.exceptions import FieldValidationError
from dms_api.common.logging import log_context
from dms_api.core.access import Role
from dms_api.core.auth import (
    AuthenticationError,
    InvalidCredentialsError,
    generate_access_token,
    hash_access_token,
    hash_password,
    verify_password,
)
from dms_api.db import utc_now
from dms_api.models import AccessToken, Department, User, UserRole
from dms_api.settings import Settings

from .schemas import RegisterRequest

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_password_hash() -> str:
    return hash_password("not-a-real-password")


def normalize_email(value: str) -> str:
    return value.strip().lower()


class AuthService:
    """Credential checks plus token issue/revoke for the API."""

    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings

    async def register(self, payload: RegisterRequest) -> tuple[User, str]:
        email = normalize_email(payload.email)

        department = await self._session.get(Department, payload.department_id)
        if department is None:
            raise FieldValidationError("department_id", "The selected department id is invalid.")

        existing = await self._session.execute(
            select(User.id).where(func.lower(User.email) == email)
        )
        if existing.first() is not None:
            raise FieldValidationError("email", "The email has already been taken.")

        user = User(
            name=payload.name,
            email=email,
            password_hash=hash_password(payload.password),
            department_id=department.id,
            department=department,
            role_assignments=[UserRole(role=Role.EMPLOYEE)],
        )
        self._session.add(user)
        await self._session.flush()

        token = await self.issue_token(user)
        logger.info(
            "auth.register.success",
            extra=log_context(user_id=user.id, department_id=department.id),
        )
        return user, token

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user owning ``email`` when ``password`` matches.

        Unknown emails still pay for one hash verification so both failure
        modes look the same from outside.
        """

        result = await self._session.execute(
            select(User).where(func.lower(User.email) == normalize_email(email))
        )
        user = result.scalar_one_or_none()
        if user is None:
            verify_password(password, _dummy_password_hash())
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        return user

    async def issue_token(self, user: User) -> str:
        token = generate_access_token(self._settings.auth_token_bytes)
        self._session.add(AccessToken(user_id=user.id, token_hash=hash_access_token(token)))
        await self._session.flush()
        return token

    async def revoke_token(self, token_id: int) -> None:
        await self._session.flush()
        await self._session.execute(delete(AccessToken).where(AccessToken.id == token_id))

    async def revoke_all_tokens(self, user_id: int) -> int:
        await self._session.flush()
        result = await self._session.execute(
            delete(AccessToken).where(AccessToken.user_id == user_id)
        )
        return result.rowcount or 0

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """Single-session login: revoke every token, then issue a new one.

        Both steps run in the request's transaction.
        """

        try:
            user = await self.authenticate(email, password)
        except InvalidCredentialsError:
            logger.info("auth.login.failed")
            raise

        revoked = await self.revoke_all_tokens(user.id)
        token = await self.issue_token(user)
        logger.info("auth.login.success", extra=log_context(user_id=user.id, revoked=revoked))
        return user, token

    async def logout(self, *, user_id: int, token_id: int) -> None:
        await self.revoke_token(token_id)
        logger.info("auth.logout.success", extra=log_context(user_id=user_id))

    async def resolve_token(self, token: str) -> tuple[User, AccessToken]:
        result = await self._session.execute(
            select(AccessToken).where(AccessToken.token_hash == hash_access_token(token))
        )
        access_token = result.scalar_one_or_none()
        if access_token is None:
            raise AuthenticationError("Unauthenticated.")
        access_token.last_used_at = utc_now()
        return access_token.user, access_token


__all__ = ["AuthService", "normalize_email"]
