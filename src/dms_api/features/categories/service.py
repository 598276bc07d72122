"""Category lookups."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dms_api.models import Category


class CategoryNotFoundError(Exception):
    def __init__(self, category_id: int) -> None:
        super().__init__(f"Category {category_id} not found")
        self.category_id = category_id


class CategoriesService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session

    async def list_categories(self) -> list[Category]:
        result = await self._session.execute(select(Category).order_by(Category.id))
        return list(result.scalars())

    async def get_category(self, category_id: int) -> Category:
        category = await self._session.get(Category, category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category


__all__ = ["CategoriesService", "CategoryNotFoundError"]
