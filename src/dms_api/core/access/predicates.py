"""Declarative document filters.

A predicate describes *which* documents match without loading any of them.
The same tree is evaluated in memory (:func:`evaluate`) and compiled to SQL
by the documents repository, so both paths always agree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Union

DocumentField = Literal["access_level", "department_id", "uploaded_by"]


@dataclass(frozen=True)
class MatchAll:
    pass


@dataclass(frozen=True)
class FieldEquals:
    field: DocumentField
    value: Any


@dataclass(frozen=True)
class AnyOf:
    clauses: tuple[Predicate, ...]


@dataclass(frozen=True)
class AllOf:
    clauses: tuple[Predicate, ...]


Predicate = Union[MatchAll, FieldEquals, AnyOf, AllOf]


def any_of(*clauses: Predicate) -> AnyOf:
    return AnyOf(tuple(clauses))


def all_of(*clauses: Predicate) -> AllOf:
    return AllOf(tuple(clauses))


def _field_value(document: Any, field: DocumentField) -> Any:
    value = getattr(document, field)
    return getattr(value, "value", value)


def evaluate(predicate: Predicate, document: Any) -> bool:
    """Return whether ``document`` satisfies ``predicate``."""

    if isinstance(predicate, MatchAll):
        return True
    if isinstance(predicate, FieldEquals):
        expected = getattr(predicate.value, "value", predicate.value)
        return _field_value(document, predicate.field) == expected
    if isinstance(predicate, AnyOf):
        return any(evaluate(clause, document) for clause in predicate.clauses)
    if isinstance(predicate, AllOf):
        return all(evaluate(clause, document) for clause in predicate.clauses)
    raise TypeError(f"Unsupported predicate: {predicate!r}")


__all__ = [
    "AllOf",
    "AnyOf",
    "DocumentField",
    "FieldEquals",
    "MatchAll",
    "Predicate",
    "all_of",
    "any_of",
    "evaluate",
]
