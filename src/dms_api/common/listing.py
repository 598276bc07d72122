from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from dms_api.common.schema import BaseSchema
from dms_api.settings import DEFAULT_PAGE_SIZE, MAX_PAGE, MAX_PAGE_SIZE, MIN_PAGE_SIZE

T = TypeVar("T")


class PageMeta(BaseSchema):
    current_page: int
    last_page: int
    per_page: int
    total: int


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Sequence[T]
    meta: PageMeta


def clamp_page(page: int | None) -> int:
    """Clamp to ``1..MAX_PAGE`` so the row offset fits a 64-bit integer."""

    if page is None:
        return 1
    return min(max(page, 1), MAX_PAGE)


def clamp_per_page(per_page: int | None) -> int:
    if per_page is None:
        return DEFAULT_PAGE_SIZE
    return min(max(per_page, MIN_PAGE_SIZE), MAX_PAGE_SIZE)


def last_page_for(total: int, per_page: int) -> int:
    return max(math.ceil(total / per_page), 1)


async def paginate_query(
    session: AsyncSession,
    stmt: Select,
    *,
    page: int,
    per_page: int,
    order_by: Sequence[ColumnElement[Any]],
) -> Page[Any]:
    """Count ``stmt`` then fetch one ordered page of its scalar rows."""

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await session.execute(count_stmt)).scalar_one()

    offset = (page - 1) * per_page
    result = await session.execute(stmt.order_by(*order_by).limit(per_page).offset(offset))
    rows = result.scalars().unique().all()

    return Page(
        items=rows,
        meta=PageMeta(
            current_page=page,
            last_page=last_page_for(total, per_page),
            per_page=per_page,
            total=total,
        ),
    )


__all__ = [
    "Page",
    "PageMeta",
    "clamp_page",
    "clamp_per_page",
    "last_page_for",
    "paginate_query",
]
