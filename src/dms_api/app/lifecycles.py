"""FastAPI lifespan helpers for the DMS application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.routing import Lifespan
from sqlalchemy.engine import make_url

from dms_api.common.logging import log_context
from dms_api.db import dispose_engine, ensure_database_ready
from dms_api.settings import Settings
from dms_api.storage import init_storage

logger = logging.getLogger(__name__)


def ensure_runtime_dirs(settings: Settings) -> None:
    """Create runtime directories required by the application."""

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.documents_dir.mkdir(parents=True, exist_ok=True)


def create_application_lifespan(*, settings: Settings) -> Lifespan[FastAPI]:
    """Return the FastAPI lifespan handler used by the app factory."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        ensure_runtime_dirs(settings)
        app.state.settings = settings

        logger.info(
            "dms_api.startup",
            extra=log_context(
                logging_level=settings.logging_level,
                version=settings.app_version,
            ),
        )

        safe_url = make_url(settings.database_dsn).render_as_string(hide_password=True)
        logger.info("db.init.start", extra={"database_url": safe_url})
        await ensure_database_ready(settings)
        logger.info("db.init.complete", extra={"database_url": safe_url})
        init_storage(app, settings)

        try:
            yield
        finally:
            await dispose_engine()
            logger.info("dms_api.shutdown")

    return lifespan


__all__ = ["create_application_lifespan", "ensure_runtime_dirs"]
