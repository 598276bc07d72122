"""Request/response contracts for the documents API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from dms_api.common.listing import PageMeta
from dms_api.common.schema import BaseSchema
from dms_api.core.access import AccessLevel, Caller, permissions_for
from dms_api.features.categories.schemas import CategoryOut
from dms_api.features.departments.schemas import DepartmentOut
from dms_api.models import Document, User
from dms_api.settings import MAX_RECORD_ID

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class UploaderOut(BaseSchema):
    id: int
    name: str
    email: str
    department_id: int
    roles: list[str]

    @classmethod
    def from_model(cls, user: User) -> UploaderOut:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            department_id=user.department_id,
            roles=user.role_names,
        )


class DocumentPermissionsOut(BaseSchema):
    can_view: bool
    can_edit: bool
    can_delete: bool


class DocumentOut(BaseSchema):
    id: int
    title: str
    description: str | None = None
    file_name: str
    file_type: str
    file_size: int
    category_id: int
    category: CategoryOut | None = None
    department_id: int
    department: DepartmentOut | None = None
    uploaded_by: int
    uploader: UploaderOut | None = None
    access_level: AccessLevel
    download_count: int
    created_at: datetime
    updated_at: datetime
    permissions: DocumentPermissionsOut

    @classmethod
    def from_model(cls, document: Document, caller: Caller) -> DocumentOut:
        decision = permissions_for(caller, document)
        return cls(
            id=document.id,
            title=document.title,
            description=document.description,
            file_name=document.file_name,
            file_type=document.file_type,
            file_size=document.file_size,
            category_id=document.category_id,
            category=CategoryOut.model_validate(document.category) if document.category else None,
            department_id=document.department_id,
            department=(
                DepartmentOut.model_validate(document.department) if document.department else None
            ),
            uploaded_by=document.uploaded_by,
            uploader=UploaderOut.from_model(document.uploader) if document.uploader else None,
            access_level=document.access_level,
            download_count=document.download_count,
            created_at=document.created_at,
            updated_at=document.updated_at,
            permissions=DocumentPermissionsOut(
                can_view=decision.can_view,
                can_edit=decision.can_edit,
                can_delete=decision.can_delete,
            ),
        )


class DocumentPage(BaseSchema):
    data: list[DocumentOut]
    meta: PageMeta


class DocumentEnvelope(BaseSchema):
    data: DocumentOut


class DocumentMutationResponse(BaseSchema):
    message: str
    data: DocumentOut


class DocumentUploadForm(BaseSchema):
    """Metadata half of the multipart upload, validated after authorization."""

    title: str = Field(..., max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    category_id: int = Field(..., ge=1, le=MAX_RECORD_ID)
    department_id: int = Field(..., ge=1, le=MAX_RECORD_ID)
    access_level: AccessLevel

    @field_validator("title", "description", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return _blank_to_none(value)


class DocumentUpdateRequest(BaseSchema):
    """Partial metadata update; omitted fields are left untouched.

    ``description`` may be cleared with ``null``; the other fields, when
    present, must carry a value.
    """

    title: str | None = Field(None, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    category_id: int | None = Field(None, ge=1, le=MAX_RECORD_ID)
    department_id: int | None = Field(None, ge=1, le=MAX_RECORD_ID)
    access_level: AccessLevel | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return _blank_to_none(value)

    # Defaults are not validated, so this only sees values the client sent.
    @field_validator("title", "category_id", "department_id", "access_level")
    @classmethod
    def _required_when_present(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field may not be null.")
        return value

    def changes(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set}


__all__ = [
    "DESCRIPTION_MAX_LENGTH",
    "DocumentEnvelope",
    "DocumentMutationResponse",
    "DocumentOut",
    "DocumentPage",
    "DocumentPermissionsOut",
    "DocumentUpdateRequest",
    "DocumentUploadForm",
    "TITLE_MAX_LENGTH",
    "UploaderOut",
]
