from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Security

from dms_api.api.deps import get_dashboard_service
from dms_api.core.http import CallerDep, require_authenticated
from dms_api.features.documents.schemas import DocumentOut

from .schemas import DashboardResponse, DashboardStats
from .service import DashboardService

router = APIRouter(
    tags=["dashboard"],
    dependencies=[Security(require_authenticated)],
)

DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Document counts and recent uploads for the caller",
)
async def read_dashboard(caller: CallerDep, service: DashboardServiceDep) -> DashboardResponse:
    summary = await service.summarize(caller)
    return DashboardResponse(
        stats=DashboardStats(
            total_documents=summary.total_documents,
            department_documents=summary.department_documents,
            my_uploads=summary.my_uploads,
        ),
        recent_documents=[
            DocumentOut.from_model(document, caller) for document in summary.recent_documents
        ],
    )


__all__ = ["router"]
