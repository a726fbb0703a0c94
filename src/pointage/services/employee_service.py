"""Employee service — business logic for employees and their checks.

Routes call AuthorizationService first, then this service. The service
itself does no permission checks.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pointage.db.models import Check, Employee, utcnow


class EmployeeService:
    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Employees ──────────────────────────────────────

    async def create_employee(
        self, first_name: str, last_name: str, email: Optional[str] = None
    ) -> Employee:
        employee = Employee(first_name=first_name, last_name=last_name, email=email)
        self.db.add(employee)
        await self.db.commit()
        await self.db.refresh(employee)
        return employee

    async def list_employees(self, limit: int = 100, offset: int = 0) -> list[Employee]:
        result = await self.db.execute(
            select(Employee).order_by(Employee.id).limit(limit).offset(offset)
        )
        return list(result.scalars().all())

    async def count_employees(self) -> int:
        return await self.db.scalar(select(func.count()).select_from(Employee))

    async def get_employee(self, employee_id: int) -> Employee | None:
        return await self.db.get(Employee, employee_id)

    async def update_employee(self, employee: Employee, changes: dict[str, Any]) -> Employee:
        for key, value in changes.items():
            setattr(employee, key, value)
        await self.db.commit()
        await self.db.refresh(employee)
        return employee

    async def delete_employee(self, employee: Employee) -> None:
        await self.db.execute(delete(Check).where(Check.employee_id == employee.id))
        await self.db.delete(employee)
        await self.db.commit()

    # ─── Checks ─────────────────────────────────────────

    async def create_check(
        self, employee_id: int, checkin: bool, date: Optional[datetime] = None
    ) -> Check:
        check = Check(employee_id=employee_id, checkin=checkin, date=date or utcnow())
        self.db.add(check)
        await self.db.commit()
        await self.db.refresh(check)
        return check

    async def list_checks(
        self,
        employee_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Check]:
        q = select(Check)
        if employee_id is not None:
            q = q.where(Check.employee_id == employee_id)
        q = q.order_by(Check.date.desc(), Check.id.desc()).limit(limit).offset(offset)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def count_checks(self, employee_id: Optional[int] = None) -> int:
        q = select(func.count()).select_from(Check)
        if employee_id is not None:
            q = q.where(Check.employee_id == employee_id)
        return await self.db.scalar(q)

    async def get_check(self, check_id: int) -> Check | None:
        return await self.db.get(Check, check_id)

    async def update_check(self, check: Check, changes: dict[str, Any]) -> Check:
        for key, value in changes.items():
            setattr(check, key, value)
        await self.db.commit()
        await self.db.refresh(check)
        return check

    async def delete_check(self, check: Check) -> None:
        await self.db.delete(check)
        await self.db.commit()
