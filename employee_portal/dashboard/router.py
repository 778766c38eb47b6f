"""Dashboard router — the employee self-service home page."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from employee_portal.dashboard.schemas import EmployeeDashboardResponse
from employee_portal.dashboard.service import DashboardService
from employee_portal.database import get_db

router = APIRouter()


# ── GET /{employee_id}/dashboard ────────────────────────────────────

@router.get("/{employee_id}/dashboard", response_model=EmployeeDashboardResponse)
async def employee_dashboard(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Attendance this month, pending leave, balances, KPIs, active review,
    latest payslip and recent notifications in one response."""
    return await DashboardService.get_employee_dashboard(db, employee_id)
