"""Liveness probe backed by a database round-trip."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from .schemas import HealthCheckResponse


class HealthService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session

    async def status(self) -> HealthCheckResponse:
        await self._session.execute(text("SELECT 1"))
        return HealthCheckResponse(status="ok")


__all__ = ["HealthService"]
