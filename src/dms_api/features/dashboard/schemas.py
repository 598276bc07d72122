from __future__ import annotations

from dms_api.common.schema import BaseSchema
from dms_api.features.documents.schemas import DocumentOut


class DashboardStats(BaseSchema):
    total_documents: int
    department_documents: int
    my_uploads: int


class DashboardResponse(BaseSchema):
    stats: DashboardStats
    recent_documents: list[DocumentOut]


__all__ = ["DashboardResponse", "DashboardStats"]
