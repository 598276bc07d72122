"""Session factories and FastAPI dependencies."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dms_api.settings import Settings, get_settings

from .engine import engine_cache_key, get_engine

_SESSION_FACTORY: async_sessionmaker[AsyncSession] | None = None
_SESSION_KEY: tuple[Any, ...] | None = None


def reset_session_state() -> None:
    """Clear the cached session factory."""

    global _SESSION_FACTORY, _SESSION_KEY
    _SESSION_FACTORY = None
    _SESSION_KEY = None


def get_sessionmaker(settings: Settings | None = None) -> async_sessionmaker[AsyncSession]:
    """Return a cached ``async_sessionmaker`` bound to the DMS engine."""

    global _SESSION_FACTORY, _SESSION_KEY
    settings = settings or get_settings()
    cache_key = engine_cache_key(settings)
    if _SESSION_FACTORY is None or _SESSION_KEY != cache_key:
        _SESSION_FACTORY = async_sessionmaker(
            bind=get_engine(settings),
            expire_on_commit=False,
            autoflush=False,
        )
        _SESSION_KEY = cache_key
    return _SESSION_FACTORY


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields one ``AsyncSession`` per request.

    Commits when the endpoint returns normally, rolls back when it raises.
    """

    session = get_sessionmaker()()
    request.state.db_session = session
    error: BaseException | None = None
    try:
        yield session
    except BaseException as exc:
        error = exc
        raise
    finally:
        try:
            if session.in_transaction():
                if error is None:
                    try:
                        await session.commit()
                    except SQLAlchemyError:
                        await session.rollback()
                        raise
                else:
                    await session.rollback()
        finally:
            if getattr(request.state, "db_session", None) is session:
                request.state.db_session = None
            await session.close()


__all__ = ["get_session", "get_sessionmaker", "reset_session_state"]
