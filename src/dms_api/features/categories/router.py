from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Security

from dms_api.api.deps import get_categories_service
from dms_api.core.http import require_authenticated

from .schemas import CategoryList, CategoryOut
from .service import CategoriesService

router = APIRouter(
    tags=["categories"],
    dependencies=[Security(require_authenticated)],
)

CategoriesServiceDep = Annotated[CategoriesService, Depends(get_categories_service)]


@router.get("/categories", response_model=CategoryList, summary="List document categories")
async def list_categories(service: CategoriesServiceDep) -> CategoryList:
    categories = await service.list_categories()
    return CategoryList(data=[CategoryOut.model_validate(item) for item in categories])


__all__ = ["router"]
