"""Shared pytest fixtures for DMS API tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from dms_api.db.engine import reset_database_state
from dms_api.main import create_app
from dms_api.settings import Settings, reload_settings
from dms_api.storage import FilesystemStorage
from tests.utils import SeededUsers, seed_users


@pytest.fixture()
def settings(tmp_path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Settings]:
    """Point the app at a fresh file-backed SQLite database and blob root."""

    data_dir = tmp_path / "data"
    monkeypatch.setenv("DMS_DATA_DIR", str(data_dir))
    monkeypatch.setenv("DMS_DOCUMENTS_DIR", str(data_dir / "documents"))
    monkeypatch.setenv("DMS_DATABASE_DSN", f"sqlite+aiosqlite:///{(data_dir / 'dms.sqlite').as_posix()}")
    monkeypatch.setenv("DMS_API_DOCS_ENABLED", "false")
    # Speed up test password hashing (hash values remain self-describing via parameters).
    monkeypatch.setenv("DMS_TEST_FAST_HASH", "1")

    reset_database_state()
    resolved = reload_settings()
    yield resolved
    reset_database_state()


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    """Return an application instance for integration-style tests."""

    return create_app(settings)


@pytest_asyncio.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Provide an HTTPX async client bound to the FastAPI app."""

    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client


@pytest_asyncio.fixture()
async def users(async_client: AsyncClient, settings: Settings) -> SeededUsers:
    """Admin, managers and employees in the HR (1) and Finance (2) departments."""

    return await seed_users(settings)


@pytest.fixture()
def storage(settings: Settings) -> FilesystemStorage:
    return FilesystemStorage(settings.documents_dir, upload_prefix="documents")
