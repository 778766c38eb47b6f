"""Attendance router — employee attendance history and current month."""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from employee_portal.attendance.schemas import AttendanceHistoryResponse
from employee_portal.attendance.service import AttendanceService, month_bounds
from employee_portal.common import clock
from employee_portal.database import get_db

router = APIRouter(prefix="", tags=["attendance"])


# ── GET /{employee_id}/attendance ───────────────────────────────────

@router.get("/{employee_id}/attendance", response_model=AttendanceHistoryResponse)
async def attendance_history(
    employee_id: uuid.UUID,
    from_date: date = Query(..., description="Start date (inclusive)"),
    to_date: date = Query(..., description="End date (inclusive)"),
    db: AsyncSession = Depends(get_db),
):
    """Attendance records in a date range with totals."""
    return await AttendanceService.get_history(db, employee_id, from_date, to_date)


# ── GET /{employee_id}/attendance/current-month ─────────────────────

@router.get(
    "/{employee_id}/attendance/current-month",
    response_model=AttendanceHistoryResponse,
)
async def current_month_attendance(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Attendance for the current calendar month."""
    today = clock.today()
    first_day, last_day = month_bounds(today.year, today.month)
    return await AttendanceService.get_history(db, employee_id, first_day, last_day)
