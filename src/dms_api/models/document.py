"""ORM model for uploaded documents."""

from __future__ import annotations

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dms_api.core.access import AccessLevel
from dms_api.db import Base, IntPrimaryKeyMixin, TimestampMixin
from dms_api.db.types import enum_values

from .category import Category
from .department import Department
from .user import User


class Document(IntPrimaryKeyMixin, TimestampMixin, Base):
    """Uploaded document metadata plus the location of its stored bytes."""

    __tablename__ = "documents"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_path: Mapped[str] = mapped_column(String(512), nullable=False)
    file_type: Mapped[str] = mapped_column(String(50), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)

    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False
    )
    department_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("departments.id", ondelete="CASCADE"), nullable=False
    )
    uploaded_by: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    access_level: Mapped[AccessLevel] = mapped_column(
        SAEnum(
            AccessLevel,
            name="document_access_level",
            native_enum=False,
            length=20,
            values_callable=enum_values,
            validate_strings=True,
        ),
        nullable=False,
        default=AccessLevel.PUBLIC,
        server_default=AccessLevel.PUBLIC.value,
    )
    download_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )

    category: Mapped[Category] = relationship("Category", lazy="selectin")
    department: Mapped[Department] = relationship("Department", lazy="selectin")
    uploader: Mapped[User] = relationship("User", lazy="selectin")

    __table_args__ = (
        CheckConstraint("file_size >= 0", name="file_size_non_negative"),
        CheckConstraint("download_count >= 0", name="download_count_non_negative"),
        Index("ix_documents_department_access", "department_id", "access_level"),
        Index("ix_documents_uploaded_by", "uploaded_by"),
        Index("ix_documents_category", "category_id"),
        Index("ix_documents_created", "created_at"),
    )


__all__ = ["Document"]
