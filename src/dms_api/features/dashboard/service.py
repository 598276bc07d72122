"""Dashboard aggregation over the caller's visible documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from dms_api.common.logging import log_context
from dms_api.core.access import Caller, visibility_predicate
from dms_api.features.documents.repository import DocumentsRepository
from dms_api.models import Document
from dms_api.settings import RECENT_DOCUMENTS_LIMIT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSummary:
    total_documents: int
    department_documents: int
    my_uploads: int
    recent_documents: list[Document]


class DashboardService:
    """Compute dashboard counts with the same predicate the listing uses.

    ``my_uploads`` is the one count not narrowed by visibility: a caller may
    always count their own uploads.
    """

    def __init__(self, *, session: AsyncSession) -> None:
        self._repository = DocumentsRepository(session)

    async def summarize(self, caller: Caller) -> DashboardSummary:
        predicate = visibility_predicate(caller)

        total = await self._repository.count_visible(predicate)
        in_department = await self._repository.count_visible(
            predicate,
            Document.department_id == caller.department_id,
        )
        mine = await self._repository.count(Document.uploaded_by == caller.id)
        recent = await self._repository.recent(predicate, limit=RECENT_DOCUMENTS_LIMIT)

        logger.debug(
            "dashboard.summarize.success",
            extra=log_context(
                user_id=caller.id,
                department_id=caller.department_id,
                total_documents=total,
            ),
        )
        return DashboardSummary(
            total_documents=total,
            department_documents=in_department,
            my_uploads=mine,
            recent_documents=recent,
        )


__all__ = ["DashboardService", "DashboardSummary"]
