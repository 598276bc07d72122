"""Request/response contracts for authentication endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import EmailStr, Field, ValidationInfo, field_validator

from dms_api.common.schema import BaseSchema, MessageResponse
from dms_api.features.departments.schemas import DepartmentOut
from dms_api.models import User
from dms_api.settings import MAX_RECORD_ID


class RegisterRequest(BaseSchema):
    """Self-service sign-up; new accounts always start as employees."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8)
    password_confirmation: str
    department_id: int = Field(..., ge=1, le=MAX_RECORD_ID)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("The name field is required.")
        return stripped

    @field_validator("password_confirmation")
    @classmethod
    def _passwords_match(cls, value: str, info: ValidationInfo) -> str:
        password = info.data.get("password")
        if password is not None and value != password:
            raise ValueError("The password confirmation does not match.")
        return value


class LoginRequest(BaseSchema):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserOut(BaseSchema):
    id: int
    name: str
    email: str
    department_id: int
    department: DepartmentOut | None = None
    roles: list[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, user: User) -> UserOut:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            department_id=user.department_id,
            department=DepartmentOut.model_validate(user.department) if user.department else None,
            roles=user.role_names,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthResponse(BaseSchema):
    message: str
    user: UserOut
    token: str
    token_type: str = "Bearer"


class UserEnvelope(BaseSchema):
    user: UserOut


__all__ = [
    "AuthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "UserEnvelope",
    "UserOut",
]
