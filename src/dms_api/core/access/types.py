"""Access-control type definitions used across the stack."""

from __future__ import annotations

import enum
from typing import Protocol


class Role(str, enum.Enum):
    """Role names a user may hold, highest priority first."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class AccessLevel(str, enum.Enum):
    """Per-document visibility tier."""

    PUBLIC = "public"
    DEPARTMENT = "department"
    PRIVATE = "private"


class DocumentFacts(Protocol):
    """The document attributes access decisions depend on."""

    @property
    def access_level(self) -> AccessLevel | str: ...

    @property
    def department_id(self) -> int: ...

    @property
    def uploaded_by(self) -> int: ...


__all__ = [
    "AccessLevel",
    "DocumentFacts",
    "Role",
]
