"""Listing filters and the SQL rendering of visibility predicates."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from sqlalchemy import and_, false, or_, true
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from dms_api.common.schema import BaseSchema
from dms_api.common.search import normalize_q, substring_predicate
from dms_api.core.access import AccessLevel, AllOf, AnyOf, FieldEquals, MatchAll, Predicate
from dms_api.models import Document
from dms_api.settings import MAX_SEARCH_LEN

_FIELD_COLUMNS = {
    "access_level": Document.access_level,
    "department_id": Document.department_id,
    "uploaded_by": Document.uploaded_by,
}


def compile_predicate(predicate: Predicate) -> ColumnElement[bool]:
    """Render a visibility predicate as a SQL boolean expression."""

    if isinstance(predicate, MatchAll):
        return true()
    if isinstance(predicate, FieldEquals):
        return _FIELD_COLUMNS[predicate.field] == predicate.value
    if isinstance(predicate, AnyOf):
        if not predicate.clauses:
            return false()
        return or_(*(compile_predicate(clause) for clause in predicate.clauses))
    if isinstance(predicate, AllOf):
        if not predicate.clauses:
            return true()
        return and_(*(compile_predicate(clause) for clause in predicate.clauses))
    raise TypeError(f"Unsupported predicate: {predicate!r}")


class DocumentFilters(BaseSchema):
    """Optional listing filters, AND-combined with each other."""

    search: str | None = Field(None, max_length=MAX_SEARCH_LEN)
    category_id: int | None = None
    department_id: int | None = None
    access_level: AccessLevel | None = None

    @field_validator("search", mode="before")
    @classmethod
    def _normalize_search(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_q(value)
        return value

    def clauses(self) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        search = substring_predicate(self.search, [Document.title, Document.description])
        if search is not None:
            conditions.append(search)
        if self.category_id is not None:
            conditions.append(Document.category_id == self.category_id)
        if self.department_id is not None:
            conditions.append(Document.department_id == self.department_id)
        if self.access_level is not None:
            conditions.append(Document.access_level == AccessLevel(self.access_level))
        return conditions


def apply_visibility(stmt: Select, predicate: Predicate) -> Select:
    return stmt.where(compile_predicate(predicate))


def apply_filters(stmt: Select, filters: DocumentFilters) -> Select:
    conditions = filters.clauses()
    if conditions:
        stmt = stmt.where(and_(*conditions))
    return stmt


__all__ = [
    "DocumentFilters",
    "apply_filters",
    "apply_visibility",
    "compile_predicate",
]
