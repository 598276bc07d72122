"""Resolve a user's role set to the single role that governs access."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .types import Role

# Highest priority first.
ROLE_PRIORITY: tuple[Role, ...] = (Role.ADMIN, Role.MANAGER, Role.EMPLOYEE)


class InvalidRoleState(Exception):
    """Raised when a user holds no recognised role."""


def coerce_roles(names: Iterable[Role | str]) -> frozenset[Role]:
    """Map role names onto :class:`Role`, dropping names that are not roles."""

    roles: set[Role] = set()
    for name in names:
        if isinstance(name, Role):
            roles.add(name)
            continue
        try:
            roles.add(Role(str(name).strip().lower()))
        except ValueError:
            continue
    return frozenset(roles)


def resolve_effective_role(names: Iterable[Role | str]) -> Role:
    """Return the highest-priority role present in ``names``.

    ``admin`` beats ``manager`` beats ``employee``. A set with no recognised
    role is a data error, not an "anonymous" user.
    """

    roles = coerce_roles(names)
    for role in ROLE_PRIORITY:
        if role in roles:
            return role
    raise InvalidRoleState("User has no recognised role")


@dataclass(frozen=True)
class Caller:
    """Identity passed explicitly into every policy and query call."""

    id: int
    department_id: int
    roles: frozenset[Role] = field(default_factory=frozenset)

    @property
    def role(self) -> Role:
        """Effective role, derived on every access."""

        return resolve_effective_role(self.roles)


__all__ = [
    "Caller",
    "InvalidRoleState",
    "ROLE_PRIORITY",
    "coerce_roles",
    "resolve_effective_role",
]
