"""Role resolution and document access policy."""

from .policy import (
    DocumentPermissions,
    can_delete,
    can_edit,
    can_upload,
    can_view,
    permissions_for,
    visibility_predicate,
)
from .predicates import (
    AllOf,
    AnyOf,
    FieldEquals,
    MatchAll,
    Predicate,
    all_of,
    any_of,
    evaluate,
)
from .roles import Caller, InvalidRoleState, coerce_roles, resolve_effective_role
from .types import AccessLevel, DocumentFacts, Role

__all__ = [
    "AccessLevel",
    "AllOf",
    "AnyOf",
    "Caller",
    "DocumentFacts",
    "DocumentPermissions",
    "FieldEquals",
    "InvalidRoleState",
    "MatchAll",
    "Predicate",
    "Role",
    "all_of",
    "any_of",
    "can_delete",
    "can_edit",
    "can_upload",
    "can_view",
    "coerce_roles",
    "evaluate",
    "permissions_for",
    "resolve_effective_role",
    "visibility_predicate",
]
