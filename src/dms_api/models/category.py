"""Document category ORM model."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dms_api.db import Base, IntPrimaryKeyMixin, TimestampMixin


class Category(IntPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "categories"

    title: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


__all__ = ["Category"]
