from __future__ import annotations

import pytest

from dms_api.common.exceptions import VALIDATION_MESSAGE, FieldValidationError, error_body


def test_field_validation_error_collects_fields() -> None:
    exc = FieldValidationError.from_errors(
        [
            {"loc": ["body", "category_id"], "msg": "The selected category id is invalid."},
            {"loc": ["body", "file"], "msg": "The file field is required.", "type": "missing"},
        ]
    )
    assert exc.fields == ["category_id", "file"]
    assert exc.errors()[0]["type"] == "value_error"
    assert exc.errors()[1]["type"] == "missing"


def test_from_errors_requires_at_least_one_error() -> None:
    with pytest.raises(ValueError):
        FieldValidationError.from_errors([])


def test_error_body_shapes() -> None:
    assert error_body("Nope.") == {"message": "Nope.", "detail": "Nope."}
    body = error_body([{"loc": ["query", "x"], "msg": "bad", "type": "value_error"}])
    assert body["message"] == VALIDATION_MESSAGE
    assert body["detail"][0]["loc"] == ["query", "x"]
