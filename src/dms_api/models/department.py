"""Department ORM model."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from dms_api.db import Base, IntPrimaryKeyMixin, TimestampMixin


class Department(IntPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "departments"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


__all__ = ["Department"]
