from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from dms_api.api.deps import get_health_service

from .schemas import HealthCheckResponse
from .service import HealthService

router = APIRouter(tags=["health"])

HealthServiceDep = Annotated[HealthService, Depends(get_health_service)]


@router.get("/health", response_model=HealthCheckResponse, summary="Service health")
async def read_health(service: HealthServiceDep) -> HealthCheckResponse:
    return await service.status()


__all__ = ["router"]
