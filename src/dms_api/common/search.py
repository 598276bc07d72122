"""Shared helpers for free-text search."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from dms_api.settings import MAX_SEARCH_LEN

LIKE_ESCAPE = "\\"


def normalize_q(q: str | None) -> str | None:
    """Strip surrounding whitespace; blank input means "no search"."""

    if q is None:
        return None
    candidate = q.strip()[:MAX_SEARCH_LEN]
    return candidate or None


def escape_like(token: str) -> str:
    return (
        token.replace(LIKE_ESCAPE, LIKE_ESCAPE + LIKE_ESCAPE)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def build_like_predicate(column: ColumnElement[object]) -> Callable[[str], ColumnElement[object]]:
    def _predicate(token: str) -> ColumnElement[object]:
        return column.ilike(f"%{escape_like(token)}%", escape=LIKE_ESCAPE)

    return _predicate


def substring_predicate(
    q: str | None,
    columns: Sequence[ColumnElement[object]],
) -> ColumnElement[object] | None:
    """Case-insensitive substring match of ``q`` over any of ``columns``."""

    normalized = normalize_q(q)
    if normalized is None:
        return None
    return or_(*(build_like_predicate(column)(normalized) for column in columns))


__all__ = [
    "LIKE_ESCAPE",
    "build_like_predicate",
    "escape_like",
    "normalize_q",
    "substring_predicate",
]
