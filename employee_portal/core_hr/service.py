"""Core HR lookups shared by the self-service modules."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from employee_portal.common.exceptions import NotFoundException
from employee_portal.core_hr.models import Employee
from employee_portal.core_hr.schemas import EmployeeProfile, EmployeeSummary


class EmployeeService:
    """Async read access to employee records."""

    @staticmethod
    async def get_employee_or_404(
        db: AsyncSession,
        employee_id: uuid.UUID,
    ) -> Employee:
        """Return the employee or raise ``NotFoundException``."""
        result = await db.execute(select(Employee).where(Employee.id == employee_id))
        employee = result.scalars().first()
        if employee is None:
            raise NotFoundException("Employee", employee_id)
        return employee

    @staticmethod
    async def get_profile(
        db: AsyncSession,
        employee_id: uuid.UUID,
    ) -> EmployeeProfile:
        """Employee record with branch, manager and direct reports."""
        result = await db.execute(
            select(Employee)
            .where(Employee.id == employee_id)
            .options(selectinload(Employee.branch), selectinload(Employee.manager))
            .execution_options(populate_existing=True)
        )
        employee = result.scalars().first()
        if employee is None:
            raise NotFoundException("Employee", employee_id)

        reports = await db.execute(
            select(Employee)
            .where(Employee.manager_id == employee_id)
            .order_by(Employee.first_name, Employee.last_name)
        )

        profile = EmployeeProfile.model_validate(employee)
        profile.direct_reports = [EmployeeSummary.model_validate(r) for r in reports.scalars().all()]
        return profile
