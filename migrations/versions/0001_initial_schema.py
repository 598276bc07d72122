"""Initial DMS schema: departments, categories, users, roles, tokens, documents.

Seeds the reference departments and categories the registration form and the
upload form select from.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Optional

import sqlalchemy as sa
from alembic import op

# Revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision: Optional[str] = None
branch_labels: Optional[str] = None
depends_on: Optional[str] = None


SEED_DEPARTMENTS = ("HR", "Finance", "IT", "Marketing", "Operations")
SEED_CATEGORIES = (
    ("Policy", "Company policies and procedures"),
    ("Report", "Periodic and ad-hoc reports"),
    ("Template", "Reusable document templates"),
    ("Guide", "How-to guides and manuals"),
    ("Form", "Fillable forms"),
    ("Other", "Everything else"),
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "departments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="departments_pkey"),
        sa.UniqueConstraint("name", name="departments_name_key"),
    )

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="categories_pkey"),
        sa.UniqueConstraint("title", name="categories_title_key"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("department_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="users_pkey"),
        sa.UniqueConstraint("email", name="users_email_key"),
        sa.ForeignKeyConstraint(
            ["department_id"],
            ["departments.id"],
            name="users_department_id_fkey",
            ondelete="CASCADE",
        ),
    )
    op.create_index("users_department_id_idx", "users", ["department_id"])

    op.create_table(
        "user_roles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.PrimaryKeyConstraint("id", name="user_roles_pkey"),
        sa.UniqueConstraint("user_id", "role", name="user_roles_user_id_key"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="user_roles_user_id_fkey",
            ondelete="CASCADE",
        ),
    )

    op.create_table(
        "access_tokens",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("token_hash", sa.String(128), nullable=False),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="access_tokens_pkey"),
        sa.UniqueConstraint("token_hash", name="access_tokens_token_hash_key"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="access_tokens_user_id_fkey",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_access_tokens_user", "access_tokens", ["user_id"])

    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("file_path", sa.String(512), nullable=False),
        sa.Column("file_type", sa.String(50), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("department_id", sa.Integer(), nullable=False),
        sa.Column("uploaded_by", sa.Integer(), nullable=False),
        sa.Column("access_level", sa.String(20), nullable=False, server_default="public"),
        sa.Column("download_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="documents_pkey"),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["categories.id"],
            name="documents_category_id_fkey",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["department_id"],
            ["departments.id"],
            name="documents_department_id_fkey",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["uploaded_by"],
            ["users.id"],
            name="documents_uploaded_by_fkey",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint(
            "file_size >= 0", name="documents_file_size_non_negative_check"
        ),
        sa.CheckConstraint(
            "download_count >= 0", name="documents_download_count_non_negative_check"
        ),
    )
    op.create_index(
        "ix_documents_department_access", "documents", ["department_id", "access_level"]
    )
    op.create_index("ix_documents_uploaded_by", "documents", ["uploaded_by"])
    op.create_index("ix_documents_category", "documents", ["category_id"])
    op.create_index("ix_documents_created", "documents", ["created_at"])

    _seed_reference_data()


def _seed_reference_data() -> None:
    now = datetime.now(UTC)
    departments = sa.table(
        "departments",
        sa.column("name", sa.String),
        sa.column("created_at", sa.DateTime(timezone=True)),
        sa.column("updated_at", sa.DateTime(timezone=True)),
    )
    categories = sa.table(
        "categories",
        sa.column("title", sa.String),
        sa.column("description", sa.Text),
        sa.column("created_at", sa.DateTime(timezone=True)),
        sa.column("updated_at", sa.DateTime(timezone=True)),
    )
    op.bulk_insert(
        departments,
        [{"name": name, "created_at": now, "updated_at": now} for name in SEED_DEPARTMENTS],
    )
    op.bulk_insert(
        categories,
        [
            {"title": title, "description": description, "created_at": now, "updated_at": now}
            for title, description in SEED_CATEGORIES
        ],
    )


def downgrade() -> None:
    op.drop_index("ix_documents_created", table_name="documents")
    op.drop_index("ix_documents_category", table_name="documents")
    op.drop_index("ix_documents_uploaded_by", table_name="documents")
    op.drop_index("ix_documents_department_access", table_name="documents")
    op.drop_table("documents")
    op.drop_index("ix_access_tokens_user", table_name="access_tokens")
    op.drop_table("access_tokens")
    op.drop_table("user_roles")
    op.drop_index("users_department_id_idx", table_name="users")
    op.drop_table("users")
    op.drop_table("categories")
    op.drop_table("departments")
