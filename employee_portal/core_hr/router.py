"""Profile router — the employee's own record, read-only."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from employee_portal.core_hr.schemas import EmployeeProfile
from employee_portal.core_hr.service import EmployeeService
from employee_portal.database import get_db

router = APIRouter(prefix="", tags=["profile"])


@router.get("/{employee_id}/profile", response_model=EmployeeProfile)
async def employee_profile(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Profile with branch, manager and direct reports."""
    return await EmployeeService.get_profile(db, employee_id)
