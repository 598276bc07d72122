from __future__ import annotations

from typing import Literal

from dms_api.common.schema import BaseSchema


class HealthCheckResponse(BaseSchema):
    status: Literal["ok"]


__all__ = ["HealthCheckResponse"]
