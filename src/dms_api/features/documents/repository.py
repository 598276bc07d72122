"""Data access helpers for document records."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement

from dms_api.common.listing import Page, paginate_query
from dms_api.core.access import Predicate
from dms_api.models import Document, User

from .filters import DocumentFilters, apply_filters, apply_visibility, compile_predicate


class DocumentsRepository:
    """Encapsulate database access for documents.

    Every read that returns or counts more than one document takes a
    visibility predicate, and applies it before any other condition.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def base_query(self) -> Select[tuple[Document]]:
        return select(Document).options(
            selectinload(Document.category),
            selectinload(Document.department),
            selectinload(Document.uploader).selectinload(User.role_assignments),
        )

    def visible_query(self, predicate: Predicate) -> Select[tuple[Document]]:
        return apply_visibility(self.base_query(), predicate)

    async def get_document(self, document_id: int) -> Document | None:
        result = await self._session.execute(
            self.base_query()
            .where(Document.id == document_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_page(
        self,
        *,
        predicate: Predicate,
        filters: DocumentFilters,
        page: int,
        per_page: int,
        order_by: Sequence[ColumnElement[Any]],
    ) -> Page[Document]:
        stmt = apply_filters(self.visible_query(predicate), filters)
        return await paginate_query(
            self._session,
            stmt,
            page=page,
            per_page=per_page,
            order_by=order_by,
        )

    async def count(self, *conditions: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(Document)
        for condition in conditions:
            stmt = stmt.where(condition)
        return (await self._session.execute(stmt)).scalar_one()

    async def count_visible(self, predicate: Predicate, *conditions: ColumnElement[bool]) -> int:
        return await self.count(compile_predicate(predicate), *conditions)

    async def recent(self, predicate: Predicate, *, limit: int) -> list[Document]:
        stmt = (
            self.visible_query(predicate)
            .order_by(Document.created_at.desc(), Document.id.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars())

    async def increment_download_count(self, document_id: int) -> int | None:
        """Add one at the database; return the new value."""

        stmt = (
            update(Document)
            .where(Document.id == document_id)
            .values(download_count=Document.download_count + 1)
            .returning(Document.download_count)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()


__all__ = ["DocumentsRepository"]
