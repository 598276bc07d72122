"""Async engine management and Alembic bootstrap."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from alembic import command
from alembic.config import Config
from sqlalchemy import event
from sqlalchemy.engine import URL, Connection, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from dms_api.settings import Settings, get_settings

_ENGINE: AsyncEngine | None = None
_ENGINE_KEY: tuple[Any, ...] | None = None
_BOOTSTRAP_LOCK = asyncio.Lock()
_BOOTSTRAPPED_URLS: set[str] = set()

logger = logging.getLogger(__name__)


def build_database_url(settings: Settings) -> URL:
    return make_url(settings.database_dsn)


def _cache_key(settings: Settings) -> tuple[Any, ...]:
    url = build_database_url(settings)
    return (
        url.render_as_string(hide_password=False),
        settings.database_echo,
        settings.database_pool_timeout,
    )


def is_sqlite_memory_url(url: URL) -> bool:
    database = (url.database or "").strip()
    if not database or database == ":memory:":
        return True
    if database.startswith("file:"):
        query = dict(url.query or {})
        if query.get("mode") == "memory":
            return True
    return False


def ensure_sqlite_database_directory(url: URL) -> None:
    """Ensure a filesystem-backed SQLite database can be created."""

    database = (url.database or "").strip()
    if not database or database == ":memory:" or database.startswith("file:"):
        return
    path = Path(database)
    if not path.is_absolute():
        path = Path.cwd() / path
    path.parent.mkdir(parents=True, exist_ok=True)


def _create_engine(settings: Settings) -> AsyncEngine:
    url = build_database_url(settings)
    engine_kwargs: dict[str, Any] = {
        "echo": settings.database_echo,
        "pool_pre_ping": True,
        "connect_args": {
            "check_same_thread": False,
            "timeout": settings.database_pool_timeout,
        },
    }

    if is_sqlite_memory_url(url):
        engine_kwargs["poolclass"] = StaticPool
    else:
        # One connection per process serializes writers.
        engine_kwargs["pool_size"] = 1
        engine_kwargs["max_overflow"] = 0
        engine_kwargs["pool_timeout"] = settings.database_pool_timeout
        ensure_sqlite_database_directory(url)

    engine = create_async_engine(url.render_as_string(hide_password=False), **engine_kwargs)

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record) -> None:
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA busy_timeout=30000")
            cursor.execute("PRAGMA journal_mode=WAL")
        finally:
            cursor.close()

    return engine


def get_engine(settings: Settings | None = None) -> AsyncEngine:
    """Return a cached async engine matching the active settings."""

    global _ENGINE, _ENGINE_KEY
    settings = settings or get_settings()
    key = _cache_key(settings)
    if _ENGINE is None or _ENGINE_KEY != key:
        if _ENGINE is not None:
            _ENGINE.sync_engine.dispose()
        _ENGINE = _create_engine(settings)
        _ENGINE_KEY = key
    return _ENGINE


def reset_database_state() -> None:
    """Dispose cached engine and associated session factories."""

    global _ENGINE, _ENGINE_KEY
    if _ENGINE is not None:
        _ENGINE.sync_engine.dispose()
    _ENGINE = None
    _ENGINE_KEY = None

    from . import session as session_module

    session_module.reset_session_state()
    reset_bootstrap_state()


async def dispose_engine() -> None:
    """Close pooled connections and forget the cached engine and sessions."""

    global _ENGINE, _ENGINE_KEY
    engine = _ENGINE
    _ENGINE = None
    _ENGINE_KEY = None
    if engine is not None:
        await engine.dispose()

    from . import session as session_module

    session_module.reset_session_state()


def _load_alembic_config(settings: Settings) -> Config:
    config_path = settings.alembic_ini_path
    if not config_path.exists():
        msg = f"Alembic configuration not found at {config_path}"
        raise FileNotFoundError(msg)
    config = Config(str(config_path))
    # Keep the API's logging configuration when migrations run in-process.
    config.attributes["configure_logger"] = False
    config.set_main_option("script_location", str(settings.alembic_migrations_dir))
    return config


def upgrade_database(settings: Settings, connection: Connection | None = None) -> None:
    """Run ``alembic upgrade head`` synchronously."""

    config = _load_alembic_config(settings)
    config.set_main_option("sqlalchemy.url", render_sync_url(settings))
    if connection is not None:
        config.attributes["connection"] = connection
    command.upgrade(config, "head")


def apply_migrations(settings: Settings) -> None:
    ensure_sqlite_database_directory(build_database_url(settings))
    upgrade_database(settings)


async def ensure_database_ready(settings: Settings | None = None) -> None:
    """Create the database and apply migrations once per URL."""

    resolved = settings or get_settings()
    url = build_database_url(resolved)
    bootstrap_key = render_sync_url(resolved)

    async with _BOOTSTRAP_LOCK:
        if bootstrap_key in _BOOTSTRAPPED_URLS:
            return

        if is_sqlite_memory_url(url):
            engine = get_engine(resolved)
            async with engine.begin() as connection:
                await connection.run_sync(
                    lambda sync_connection: upgrade_database(resolved, connection=sync_connection)
                )
        else:
            await asyncio.to_thread(apply_migrations, resolved)
        _BOOTSTRAPPED_URLS.add(bootstrap_key)
        logger.info("database.migrations.applied", extra={"database": url.database or ":memory:"})


def reset_bootstrap_state() -> None:
    """Clear cached bootstrap results (useful for tests)."""

    _BOOTSTRAPPED_URLS.clear()


def engine_cache_key(settings: Settings) -> tuple[Any, ...]:
    """Expose the cache key used for engine/session reuse."""

    return _cache_key(settings)


def render_sync_url(database: Settings | str) -> str:
    """Return a synchronous SQLAlchemy URL for Alembic migrations."""

    if isinstance(database, Settings):
        url = build_database_url(database)
    else:
        url = make_url(database)
    sync_url = url.set(drivername=url.get_backend_name())
    return sync_url.render_as_string(hide_password=False)


__all__ = [
    "apply_migrations",
    "build_database_url",
    "dispose_engine",
    "engine_cache_key",
    "ensure_database_ready",
    "ensure_sqlite_database_directory",
    "get_engine",
    "is_sqlite_memory_url",
    "render_sync_url",
    "reset_bootstrap_state",
    "reset_database_state",
    "upgrade_database",
]
