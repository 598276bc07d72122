"""Service factories used by API routers.

Routers import their per-request service constructors from here.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dms_api.db.session import get_session
from dms_api.settings import Settings, get_settings
from dms_api.storage import StorageAdapter, get_storage

SessionDep = Annotated[AsyncSession, Depends(get_session)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
StorageDep = Annotated[StorageAdapter, Depends(get_storage)]


def get_auth_service(session: SessionDep, settings: SettingsDep):
    from dms_api.features.auth.service import AuthService

    return AuthService(session=session, settings=settings)


def get_departments_service(session: SessionDep):
    from dms_api.features.departments.service import DepartmentsService

    return DepartmentsService(session=session)


def get_categories_service(session: SessionDep):
    from dms_api.features.categories.service import CategoriesService

    return CategoriesService(session=session)


def get_documents_service(session: SessionDep, settings: SettingsDep, storage: StorageDep):
    from dms_api.features.documents.service import DocumentsService

    return DocumentsService(session=session, settings=settings, storage=storage)


def get_dashboard_service(session: SessionDep):
    from dms_api.features.dashboard.service import DashboardService

    return DashboardService(session=session)


def get_health_service(session: SessionDep):
    from dms_api.features.health.service import HealthService

    return HealthService(session=session)


__all__ = [
    "SessionDep",
    "SettingsDep",
    "StorageDep",
    "get_auth_service",
    "get_categories_service",
    "get_dashboard_service",
    "get_departments_service",
    "get_documents_service",
    "get_health_service",
]
