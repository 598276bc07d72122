"""User accounts, role assignments and bearer tokens."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dms_api.core.access import Caller, Role, coerce_roles
from dms_api.db import Base, IntPrimaryKeyMixin, TimestampMixin
from dms_api.db.types import UTCDateTime, enum_values

from .department import Department


class User(IntPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    department_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("departments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    department: Mapped[Department] = relationship("Department", lazy="selectin")
    role_assignments: Mapped[list[UserRole]] = relationship(
        "UserRole",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="UserRole.id",
    )

    @property
    def role_names(self) -> list[str]:
        return [
            getattr(entry.role, "value", entry.role)
            for entry in getattr(self, "role_assignments", [])
        ]

    def to_caller(self) -> Caller:
        return Caller(
            id=self.id,
            department_id=self.department_id,
            roles=coerce_roles(self.role_names),
        )


class UserRole(IntPrimaryKeyMixin, Base):
    __tablename__ = "user_roles"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    role: Mapped[Role] = mapped_column(
        SAEnum(
            Role,
            name="user_role",
            native_enum=False,
            length=20,
            values_callable=enum_values,
        ),
        nullable=False,
    )

    user: Mapped[User] = relationship("User", back_populates="role_assignments")

    __table_args__ = (UniqueConstraint("user_id", "role"),)


class AccessToken(IntPrimaryKeyMixin, TimestampMixin, Base):
    """Issued bearer token; only the digest is stored."""

    __tablename__ = "access_tokens"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    token_hash: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    last_used_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    user: Mapped[User] = relationship("User", lazy="selectin")

    __table_args__ = (Index("ix_access_tokens_user", "user_id"),)


__all__ = ["AccessToken", "User", "UserRole"]
