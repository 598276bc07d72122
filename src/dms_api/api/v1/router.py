"""Version 1 API surface."""

from __future__ import annotations

from fastapi import APIRouter

from dms_api.features.auth.router import router as auth_router
from dms_api.features.categories.router import router as categories_router
from dms_api.features.dashboard.router import router as dashboard_router
from dms_api.features.departments.router import router as departments_router
from dms_api.features.documents.router import router as documents_router
from dms_api.features.health.router import router as health_router

API_V1_PREFIX = "/v1"


def create_api_router() -> APIRouter:
    """Return a router with every v1 feature mounted."""

    router = APIRouter(prefix=API_V1_PREFIX)
    router.include_router(health_router)
    router.include_router(auth_router)
    router.include_router(departments_router)
    router.include_router(categories_router)
    router.include_router(documents_router)
    router.include_router(dashboard_router)
    return router


__all__ = ["API_V1_PREFIX", "create_api_router"]
