from __future__ import annotations

import pytest

from tests.utils import FINANCE, HR, IT, POLICY, upload

pytestmark = pytest.mark.asyncio


async def test_manager_uploads_to_own_department(async_client, users, storage) -> None:
    response = await upload(async_client, users.manager, fields={"department_id": HR})

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["message"] == "Document uploaded successfully"

    document = body["data"]
    assert document["title"] == "Employee handbook"
    assert document["description"] == "Rules and benefits"
    assert document["category_id"] == POLICY
    assert document["department_id"] == HR
    assert document["access_level"] == "department"
    assert document["file_name"] == "handbook.pdf"
    assert document["file_type"] == "pdf"
    assert document["file_size"] == len(b"%PDF-1.4 handbook")
    assert document["uploaded_by"] == users.manager.id
    assert document["download_count"] == 0
    assert document["permissions"] == {"can_view": True, "can_edit": True, "can_delete": True}

    shown = await async_client.get(
        f"/api/v1/documents/{document['id']}", headers=users.manager.headers
    )
    assert shown.status_code == 200
    assert shown.json()["data"] == document


async def test_manager_cannot_upload_to_another_department(async_client, users, storage) -> None:
    response = await upload(async_client, users.manager, fields={"department_id": FINANCE})

    assert response.status_code == 403
    assert response.json()["message"] == "Managers can only upload to their own department."
    assert not any(path.is_file() for path in storage.base_dir.rglob("*"))


async def test_admin_uploads_anywhere(async_client, users) -> None:
    response = await upload(
        async_client,
        users.admin,
        fields={"department_id": IT, "access_level": "private"},
        file=("Budget.XLSX", b"PK\x03\x04 sheet", "application/octet-stream"),
    )

    assert response.status_code == 201, response.text
    document = response.json()["data"]
    assert document["department_id"] == IT
    assert document["file_type"] == "xlsx"
    assert document["file_name"] == "Budget.XLSX"


async def test_employee_is_denied_before_validation(async_client, users) -> None:
    malformed = await async_client.post(
        "/api/v1/documents",
        headers=users.employee.headers,
        data={"access_level": "secret"},
    )

    assert malformed.status_code == 403
    assert malformed.json()["message"] == (
        "Unauthorized. Only admins and managers can upload documents."
    )


async def test_missing_fields_are_reported_together(async_client, users) -> None:
    response = await async_client.post(
        "/api/v1/documents",
        headers=users.manager.headers,
        data={"description": "no title"},
    )

    assert response.status_code == 422
    fields = {error["loc"][-1] for error in response.json()["detail"]}
    assert fields == {"title", "category_id", "department_id", "access_level", "file"}


@pytest.mark.parametrize(
    ("fields", "field"),
    [
        ({"category_id": 999}, "category_id"),
        ({"department_id": 999}, "department_id"),
        ({"category_id": 2**70}, "category_id"),
        ({"department_id": 2**70}, "department_id"),
        ({"access_level": "secret"}, "access_level"),
        ({"title": "x" * 256}, "title"),
    ],
)
async def test_invalid_metadata_is_rejected(async_client, users, fields, field) -> None:
    response = await upload(async_client, users.admin, fields=fields)

    assert response.status_code == 422, response.text
    assert field in [error["loc"][-1] for error in response.json()["detail"]]


async def test_disallowed_extension_is_rejected(async_client, users, storage) -> None:
    response = await upload(
        async_client,
        users.manager,
        file=("script.exe", b"MZ", "application/octet-stream"),
    )

    assert response.status_code == 422
    error = response.json()["detail"][0]
    assert error["loc"] == ["body", "file"]
    assert error["msg"].startswith("The file must be a file of type: pdf")
    assert not any(path.is_file() for path in storage.base_dir.rglob("*"))


async def test_oversized_file_is_rejected(async_client, users, settings) -> None:
    settings.storage_upload_max_bytes = 8

    response = await upload(
        async_client,
        users.manager,
        file=("big.pdf", b"0123456789abcdef", "application/pdf"),
    )

    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"] == ["body", "file"]
