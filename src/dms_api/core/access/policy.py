"""Document access policy.

Every decision takes the caller explicitly; nothing here reads request or
global state.

Listing breadth and single-document visibility differ for managers: the
visibility predicate lets a manager list every document of their own
department, while :func:`can_view` only grants private documents to their
uploader (or an admin).
"""

from __future__ import annotations

from dataclasses import dataclass

from .predicates import FieldEquals, MatchAll, Predicate, all_of, any_of
from .roles import Caller
from .types import AccessLevel, DocumentFacts, Role


def _level(document: DocumentFacts) -> AccessLevel:
    return AccessLevel(getattr(document.access_level, "value", document.access_level))


def can_view(caller: Caller, document: DocumentFacts) -> bool:
    if caller.role is Role.ADMIN:
        return True
    level = _level(document)
    if level is AccessLevel.PUBLIC:
        return True
    if level is AccessLevel.DEPARTMENT:
        return document.department_id == caller.department_id
    return document.uploaded_by == caller.id


def can_edit(caller: Caller, document: DocumentFacts) -> bool:
    role = caller.role
    if role is Role.ADMIN:
        return True
    return role is Role.MANAGER and document.uploaded_by == caller.id


def can_delete(caller: Caller, document: DocumentFacts) -> bool:
    return can_edit(caller, document)


def can_upload(caller: Caller) -> bool:
    return caller.role in (Role.ADMIN, Role.MANAGER)


def visibility_predicate(caller: Caller) -> Predicate:
    """Describe the documents ``caller`` may list and count."""

    role = caller.role
    public = FieldEquals("access_level", AccessLevel.PUBLIC)
    own_department = FieldEquals("department_id", caller.department_id)

    if role is Role.ADMIN:
        return MatchAll()
    if role is Role.MANAGER:
        return any_of(public, own_department)
    return any_of(
        public,
        all_of(FieldEquals("access_level", AccessLevel.DEPARTMENT), own_department),
    )


@dataclass(frozen=True)
class DocumentPermissions:
    can_view: bool
    can_edit: bool
    can_delete: bool


def permissions_for(caller: Caller, document: DocumentFacts) -> DocumentPermissions:
    return DocumentPermissions(
        can_view=can_view(caller, document),
        can_edit=can_edit(caller, document),
        can_delete=can_delete(caller, document),
    )


__all__ = [
    "DocumentPermissions",
    "can_delete",
    "can_edit",
    "can_upload",
    "can_view",
    "permissions_for",
    "visibility_predicate",
]
