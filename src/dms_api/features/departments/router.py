from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from dms_api.api.deps import get_departments_service

from .schemas import DepartmentList, DepartmentOut
from .service import DepartmentsService

router = APIRouter(tags=["departments"])

DepartmentsServiceDep = Annotated[DepartmentsService, Depends(get_departments_service)]


@router.get(
    "/departments",
    response_model=DepartmentList,
    summary="List departments",
    description="Public so the registration form can offer a department choice.",
)
async def list_departments(service: DepartmentsServiceDep) -> DepartmentList:
    departments = await service.list_departments()
    return DepartmentList(data=[DepartmentOut.model_validate(item) for item in departments])


__all__ = ["router"]
