"""Helper functions shared across tests."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any

from httpx import AsyncClient

from dms_api.core.access import AccessLevel, Role
from dms_api.core.auth import hash_password
from dms_api.db import get_sessionmaker
from dms_api.features.auth.service import AuthService
from dms_api.models import Document, User, UserRole
from dms_api.settings import Settings
from dms_api.storage import FilesystemStorage

# Reference rows created by the initial migration.
HR = 1
FINANCE = 2
IT = 3
POLICY = 1
REPORT = 2

PASSWORD = "correct-horse-battery"


@dataclass
class SeededUser:
    id: int
    email: str
    department_id: int
    token: str
    password: str = PASSWORD

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@dataclass
class SeededUsers:
    admin: SeededUser
    manager: SeededUser
    other_manager: SeededUser
    employee: SeededUser
    other_employee: SeededUser


async def create_user(
    settings: Settings,
    *,
    name: str,
    email: str,
    department_id: int,
    roles: tuple[Role, ...],
    password: str = PASSWORD,
) -> SeededUser:
    """Insert a user holding ``roles`` and issue it a bearer token."""

    session_factory = get_sessionmaker(settings)
    async with session_factory() as session:
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            department_id=department_id,
            role_assignments=[UserRole(role=role) for role in roles],
        )
        session.add(user)
        await session.flush()
        token = await AuthService(session=session, settings=settings).issue_token(user)
        await session.commit()
        return SeededUser(
            id=user.id,
            email=email,
            department_id=department_id,
            token=token,
            password=password,
        )


async def seed_users(settings: Settings) -> SeededUsers:
    return SeededUsers(
        admin=await create_user(
            settings,
            name="Ada Admin",
            email="ada@acme.org",
            department_id=HR,
            roles=(Role.ADMIN, Role.EMPLOYEE),
        ),
        manager=await create_user(
            settings,
            name="Max Manager",
            email="max@acme.org",
            department_id=HR,
            roles=(Role.MANAGER,),
        ),
        other_manager=await create_user(
            settings,
            name="Fay Finance",
            email="fay@acme.org",
            department_id=FINANCE,
            roles=(Role.MANAGER,),
        ),
        employee=await create_user(
            settings,
            name="Eve Employee",
            email="eve@acme.org",
            department_id=HR,
            roles=(Role.EMPLOYEE,),
        ),
        other_employee=await create_user(
            settings,
            name="Ed Employee",
            email="ed@acme.org",
            department_id=FINANCE,
            roles=(Role.EMPLOYEE,),
        ),
    )


async def create_document(
    settings: Settings,
    *,
    uploaded_by: int,
    department_id: int,
    access_level: AccessLevel = AccessLevel.PUBLIC,
    category_id: int = POLICY,
    title: str = "Quarterly report",
    description: str | None = None,
    content: bytes = b"%PDF-1.4 test",
    file_name: str = "report.pdf",
    download_count: int = 0,
) -> int:
    """Store ``content`` and insert a matching document row; return its id."""

    storage = FilesystemStorage(settings.documents_dir, upload_prefix="documents")
    stored = await storage.put(io.BytesIO(content), suffix="pdf")

    session_factory = get_sessionmaker(settings)
    async with session_factory() as session:
        document = Document(
            title=title,
            description=description,
            file_name=file_name,
            file_path=stored.uri,
            file_type=file_name.rsplit(".", 1)[-1].lower(),
            file_size=stored.byte_size,
            category_id=category_id,
            department_id=department_id,
            uploaded_by=uploaded_by,
            access_level=access_level,
            download_count=download_count,
        )
        session.add(document)
        await session.commit()
        return document.id


async def upload(
    client: AsyncClient,
    user: SeededUser,
    *,
    fields: dict[str, Any] | None = None,
    file: tuple[str, bytes, str] | None = ("handbook.pdf", b"%PDF-1.4 handbook", "application/pdf"),
):
    """POST a multipart upload as ``user``."""

    data = {
        "title": "Employee handbook",
        "description": "Rules and benefits",
        "category_id": str(POLICY),
        "department_id": str(user.department_id),
        "access_level": "department",
    }
    data.update({key: str(value) for key, value in (fields or {}).items()})
    files = {"file": file} if file is not None else None
    return await client.post("/api/v1/documents", headers=user.headers, data=data, files=files)


def listed_ids(payload: dict[str, Any]) -> list[int]:
    return [item["id"] for item in payload["data"]]


__all__ = [
    "FINANCE",
    "HR",
    "IT",
    "PASSWORD",
    "POLICY",
    "REPORT",
    "SeededUser",
    "SeededUsers",
    "create_document",
    "create_user",
    "listed_ids",
    "seed_users",
    "upload",
]
