from __future__ import annotations

from datetime import datetime

from dms_api.common.schema import BaseSchema


class DepartmentOut(BaseSchema):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime


class DepartmentList(BaseSchema):
    data: list[DepartmentOut]


__all__ = ["DepartmentList", "DepartmentOut"]
