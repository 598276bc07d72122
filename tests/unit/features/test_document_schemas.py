from __future__ import annotations

import pytest
from pydantic import ValidationError

from dms_api.features.documents.filters import DocumentFilters
from dms_api.features.documents.schemas import DocumentUpdateRequest, DocumentUploadForm


def test_update_request_reports_only_sent_fields() -> None:
    update = DocumentUpdateRequest.model_validate({"title": "  New title ", "description": None})
    assert update.changes() == {"title": "New title", "description": None}


@pytest.mark.parametrize("field", ["title", "category_id", "department_id", "access_level"])
def test_update_request_rejects_explicit_null_for_required_fields(field) -> None:
    with pytest.raises(ValidationError) as excinfo:
        DocumentUpdateRequest.model_validate({field: None})
    assert excinfo.value.errors()[0]["loc"] == (field,)


def test_update_request_rejects_unknown_access_level() -> None:
    with pytest.raises(ValidationError):
        DocumentUpdateRequest.model_validate({"access_level": "secret"})


def test_upload_form_requires_title() -> None:
    with pytest.raises(ValidationError) as excinfo:
        DocumentUploadForm.model_validate(
            {"title": "   ", "category_id": "1", "department_id": "1", "access_level": "public"}
        )
    assert {error["loc"][0] for error in excinfo.value.errors()} == {"title"}


def test_filters_normalize_blank_search() -> None:
    assert DocumentFilters(search="   ").search is None
    assert DocumentFilters(search=" memo ").search == "memo"
