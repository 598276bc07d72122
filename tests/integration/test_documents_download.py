from __future__ import annotations

import asyncio

import pytest

from dms_api.core.access import AccessLevel
from tests.utils import FINANCE, HR, create_document

pytestmark = pytest.mark.asyncio


async def _download_count(client, user, document_id: int) -> int:
    response = await client.get(f"/api/v1/documents/{document_id}", headers=user.headers)
    assert response.status_code == 200
    return response.json()["data"]["download_count"]


async def test_download_streams_file_and_counts(async_client, settings, users) -> None:
    document_id = await create_document(
        settings,
        uploaded_by=users.manager.id,
        department_id=HR,
        access_level=AccessLevel.DEPARTMENT,
        content=b"%PDF-1.4 payroll",
        file_name="payroll.pdf",
    )

    response = await async_client.get(
        f"/api/v1/documents/{document_id}/download", headers=users.employee.headers
    )

    assert response.status_code == 200
    assert response.content == b"%PDF-1.4 payroll"
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="payroll.pdf"'
    assert await _download_count(async_client, users.manager, document_id) == 1


async def test_non_ascii_file_name_gets_utf8_variant(async_client, settings, users) -> None:
    document_id = await create_document(
        settings, uploaded_by=users.manager.id, department_id=HR, file_name="résumé.pdf"
    )

    response = await async_client.get(
        f"/api/v1/documents/{document_id}/download", headers=users.manager.headers
    )

    assert response.status_code == 200
    disposition = response.headers["content-disposition"]
    assert "filename*=UTF-8''r%C3%A9sum%C3%A9.pdf" in disposition


async def test_download_denied_without_view_access(async_client, settings, users) -> None:
    document_id = await create_document(
        settings,
        uploaded_by=users.other_manager.id,
        department_id=FINANCE,
        access_level=AccessLevel.PRIVATE,
    )

    response = await async_client.get(
        f"/api/v1/documents/{document_id}/download", headers=users.employee.headers
    )

    assert response.status_code == 403
    assert response.json()["message"] == "Unauthorized to download this document."
    assert await _download_count(async_client, users.other_manager, document_id) == 0


async def test_missing_document_is_404(async_client, users) -> None:
    response = await async_client.get(
        "/api/v1/documents/31337/download", headers=users.admin.headers
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Document not found."


async def test_missing_blob_is_404_without_increment(
    async_client, settings, users, storage
) -> None:
    document_id = await create_document(
        settings, uploaded_by=users.manager.id, department_id=HR, download_count=3
    )
    for path in storage.base_dir.rglob("*"):
        if path.is_file():
            path.unlink()

    response = await async_client.get(
        f"/api/v1/documents/{document_id}/download", headers=users.manager.headers
    )

    assert response.status_code == 404
    assert response.json()["message"] == "File not found."
    assert await _download_count(async_client, users.manager, document_id) == 3


async def test_concurrent_downloads_are_all_counted(async_client, settings, users) -> None:
    document_id = await create_document(
        settings, uploaded_by=users.manager.id, department_id=HR, download_count=10
    )
    url = f"/api/v1/documents/{document_id}/download"

    first, second = await asyncio.gather(
        async_client.get(url, headers=users.manager.headers),
        async_client.get(url, headers=users.admin.headers),
    )

    assert (first.status_code, second.status_code) == (200, 200)
    assert await _download_count(async_client, users.manager, document_id) == 12
