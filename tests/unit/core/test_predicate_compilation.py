from __future__ import annotations

from sqlalchemy.dialects import sqlite

from dms_api.core.access import AnyOf, Caller, MatchAll, Role, all_of, visibility_predicate
from dms_api.features.documents.filters import compile_predicate


def _sql(predicate) -> str:
    compiled = compile_predicate(predicate).compile(
        dialect=sqlite.dialect(),
        compile_kwargs={"literal_binds": True},
    )
    return str(compiled)


def test_match_all_compiles_to_true() -> None:
    assert _sql(MatchAll()) in {"1", "true"}


def test_empty_any_of_matches_nothing() -> None:
    assert _sql(AnyOf(())) in {"0", "false"}


def test_empty_all_of_matches_everything() -> None:
    assert _sql(all_of()) in {"1", "true"}


def test_employee_predicate_compiles_to_access_and_department_terms() -> None:
    caller = Caller(id=4, department_id=2, roles=frozenset({Role.EMPLOYEE}))
    sql = _sql(visibility_predicate(caller))
    assert "documents.access_level = 'public'" in sql
    assert "documents.access_level = 'department'" in sql
    assert "documents.department_id = 2" in sql
    assert " OR " in sql


def test_manager_predicate_does_not_mention_uploader() -> None:
    caller = Caller(id=4, department_id=2, roles=frozenset({Role.MANAGER}))
    sql = _sql(visibility_predicate(caller))
    assert "uploaded_by" not in sql
    assert "documents.department_id = 2" in sql
