"""Shared Pydantic base schema."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base class for all API schemas with DMS defaults."""

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
        extra="ignore",
    )


class MessageResponse(BaseSchema):
    message: str


__all__ = ["BaseSchema", "MessageResponse"]
