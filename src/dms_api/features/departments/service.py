"""Department lookups."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dms_api.models import Department


class DepartmentNotFoundError(Exception):
    def __init__(self, department_id: int) -> None:
        super().__init__(f"Department {department_id} not found")
        self.department_id = department_id


class DepartmentsService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session

    async def list_departments(self) -> list[Department]:
        result = await self._session.execute(select(Department).order_by(Department.id))
        return list(result.scalars())

    async def get_department(self, department_id: int) -> Department:
        department = await self._session.get(Department, department_id)
        if department is None:
            raise DepartmentNotFoundError(department_id)
        return department


__all__ = ["DepartmentNotFoundError", "DepartmentsService"]
