from __future__ import annotations

from datetime import datetime

from dms_api.common.schema import BaseSchema


class CategoryOut(BaseSchema):
    id: int
    title: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class CategoryList(BaseSchema):
    data: list[CategoryOut]


__all__ = ["CategoryList", "CategoryOut"]
