from __future__ import annotations

import pytest
from sqlalchemy.dialects import sqlite

from dms_api.features.documents.sorting import order_by_for, resolve_sort


@pytest.mark.parametrize(
    ("sort_by", "sort_order", "expected"),
    [
        (None, None, ("created_at", "desc")),
        ("title", "asc", ("title", "asc")),
        ("title", "ASC", ("title", "desc")),
        ("title", " asc ", ("title", "desc")),
        ("file_size", "sideways", ("file_size", "desc")),
        ("download_count", None, ("download_count", "desc")),
        ("password_hash", "asc", ("created_at", "asc")),
        ("uploaded_by; DROP TABLE documents", None, ("created_at", "desc")),
    ],
)
def test_resolve_sort_whitelists_columns(sort_by, sort_order, expected) -> None:
    assert resolve_sort(sort_by, sort_order) == expected


def _render(clauses) -> list[str]:
    return [str(clause.compile(dialect=sqlite.dialect())) for clause in clauses]


def test_identity_breaks_ties_in_the_same_direction() -> None:
    assert _render(order_by_for("title", "asc")) == ["documents.title ASC", "documents.id ASC"]
    assert _render(order_by_for("bogus", None)) == [
        "documents.created_at DESC",
        "documents.id DESC",
    ]
