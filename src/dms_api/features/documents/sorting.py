from __future__ import annotations

from typing import Any

from sqlalchemy.sql.elements import ColumnElement

from dms_api.models import Document

SORT_FIELDS: dict[str, Any] = {
    "title": Document.title,
    "created_at": Document.created_at,
    "file_size": Document.file_size,
    "download_count": Document.download_count,
}

DEFAULT_SORT_BY = "created_at"
DEFAULT_SORT_ORDER = "desc"


def resolve_sort(sort_by: str | None, sort_order: str | None) -> tuple[str, str]:
    """Whitelist the sort column; anything but ``asc`` means descending."""

    column = sort_by if sort_by in SORT_FIELDS else DEFAULT_SORT_BY
    direction = "asc" if sort_order == "asc" else DEFAULT_SORT_ORDER
    return column, direction


def order_by_for(sort_by: str | None, sort_order: str | None) -> list[ColumnElement[Any]]:
    """ORDER BY clauses with the identity as a same-direction tie-breaker."""

    column_name, direction = resolve_sort(sort_by, sort_order)
    column = SORT_FIELDS[column_name]
    if direction == "asc":
        return [column.asc(), Document.id.asc()]
    return [column.desc(), Document.id.desc()]


__all__ = [
    "DEFAULT_SORT_BY",
    "DEFAULT_SORT_ORDER",
    "SORT_FIELDS",
    "order_by_for",
    "resolve_sort",
]
