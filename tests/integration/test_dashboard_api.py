from __future__ import annotations

import pytest
import pytest_asyncio

from dms_api.core.access import AccessLevel
from tests.utils import FINANCE, HR, IT, create_document

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture()
async def documents(settings, users) -> list[int]:
    layout = [
        (users.manager, HR, AccessLevel.PUBLIC),
        (users.manager, HR, AccessLevel.DEPARTMENT),
        (users.manager, HR, AccessLevel.PRIVATE),
        (users.other_manager, FINANCE, AccessLevel.PUBLIC),
        (users.other_manager, FINANCE, AccessLevel.DEPARTMENT),
        (users.admin, IT, AccessLevel.DEPARTMENT),
        (users.admin, IT, AccessLevel.PRIVATE),
    ]
    return [
        await create_document(
            settings,
            uploaded_by=owner.id,
            department_id=department_id,
            access_level=level,
            title=f"Document {index}",
        )
        for index, (owner, department_id, level) in enumerate(layout)
    ]


async def _stats(client, user) -> dict:
    response = await client.get("/api/v1/dashboard", headers=user.headers)
    assert response.status_code == 200, response.text
    return response.json()


@pytest.mark.parametrize(
    ("role", "expected"),
    [
        ("admin", {"total_documents": 7, "department_documents": 3, "my_uploads": 2}),
        ("manager", {"total_documents": 4, "department_documents": 3, "my_uploads": 3}),
        ("employee", {"total_documents": 3, "department_documents": 2, "my_uploads": 0}),
        ("other_employee", {"total_documents": 3, "department_documents": 2, "my_uploads": 0}),
    ],
)
async def test_counts_follow_visibility(async_client, users, documents, role, expected) -> None:
    payload = await _stats(async_client, getattr(users, role))

    assert payload["stats"] == expected


async def test_employee_does_not_count_other_departments(
    async_client, settings, users, documents
) -> None:
    await create_document(
        settings,
        uploaded_by=users.admin.id,
        department_id=IT,
        access_level=AccessLevel.DEPARTMENT,
    )

    payload = await _stats(async_client, users.other_employee)

    assert payload["stats"]["total_documents"] == 3
    assert all(item["department_id"] != IT for item in payload["recent_documents"])


async def test_recent_documents_are_newest_visible_first(
    async_client, users, documents
) -> None:
    admin = await _stats(async_client, users.admin)
    recent = [item["id"] for item in admin["recent_documents"]]
    assert recent == sorted(documents, reverse=True)[:5]

    employee = await _stats(async_client, users.employee)
    assert [item["id"] for item in employee["recent_documents"]] == [
        documents[3],
        documents[1],
        documents[0],
    ]
    assert all(item["permissions"]["can_view"] for item in employee["recent_documents"])


async def test_empty_dashboard(async_client, users) -> None:
    payload = await _stats(async_client, users.employee)

    assert payload == {
        "stats": {"total_documents": 0, "department_documents": 0, "my_uploads": 0},
        "recent_documents": [],
    }


async def test_dashboard_requires_authentication(async_client) -> None:
    response = await async_client.get("/api/v1/dashboard")

    assert response.status_code == 401
