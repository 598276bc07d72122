"""Database column types shared across DMS models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy.types import DateTime, TypeDecorator

__all__ = ["UTCDateTime", "enum_values"]


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime that normalizes values to UTC.

    SQLite stores naive values; results are re-tagged as UTC on the way out.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any):
        if value is None:
            return None
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=UTC)
            return value.astimezone(UTC)
        return value

    def process_result_value(self, value: Any, dialect: Any):
        if value is None:
            return None
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=UTC)
            return value.astimezone(UTC)
        return value


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Return the list of values for ``enum_cls`` suitable for SAEnum."""

    return [member.value for member in enum_cls]
