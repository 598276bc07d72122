"""Database engine, session and declarative base."""

from .base import Base, IntPrimaryKeyMixin, TimestampMixin, metadata, utc_now
from .engine import dispose_engine, ensure_database_ready, get_engine, reset_database_state
from .session import get_session, get_sessionmaker

__all__ = [
    "Base",
    "IntPrimaryKeyMixin",
    "TimestampMixin",
    "dispose_engine",
    "ensure_database_ready",
    "get_engine",
    "get_session",
    "get_sessionmaker",
    "metadata",
    "reset_database_state",
    "utc_now",
]
