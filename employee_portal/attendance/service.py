"""Attendance service — read-only history and monthly summaries."""

from __future__ import annotations

import calendar
import uuid
from datetime import date
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_portal.attendance.models import AttendanceRecord
from employee_portal.attendance.schemas import (
    AttendanceHistoryResponse,
    AttendanceRecordOut,
    AttendanceSummary,
)
from employee_portal.common.exceptions import ValidationException
from employee_portal.core_hr.service import EmployeeService


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of *year*-*month*."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


class AttendanceService:
    """Async attendance queries for the self-service portal."""

    @staticmethod
    def build_summary(records: Sequence[AttendanceRecord]) -> AttendanceSummary:
        """Aggregate totals. Missing hour values count as zero."""
        return AttendanceSummary(
            total_days=len(records),
            present_days=sum(1 for r in records if r.is_present),
            total_working_hours=sum(r.working_hours or 0.0 for r in records),
            total_overtime_hours=sum(r.overtime_hours or 0.0 for r in records),
        )

    @staticmethod
    async def _records_between(
        db: AsyncSession,
        employee_id: uuid.UUID,
        from_date: date,
        to_date: date,
    ) -> list[AttendanceRecord]:
        result = await db.execute(
            select(AttendanceRecord)
            .where(
                AttendanceRecord.employee_id == employee_id,
                AttendanceRecord.date >= from_date,
                AttendanceRecord.date <= to_date,
            )
            .order_by(AttendanceRecord.date.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_history(
        db: AsyncSession,
        employee_id: uuid.UUID,
        from_date: date,
        to_date: date,
    ) -> AttendanceHistoryResponse:
        """Records in [from_date, to_date], newest first, with totals."""
        if from_date > to_date:
            raise ValidationException(
                {"date_range": ["from_date must be before or equal to to_date."]}
            )
        await EmployeeService.get_employee_or_404(db, employee_id)

        records = await AttendanceService._records_between(
            db, employee_id, from_date, to_date,
        )
        return AttendanceHistoryResponse(
            employee_id=employee_id,
            from_date=from_date,
            to_date=to_date,
            data=[AttendanceRecordOut.model_validate(r) for r in records],
            summary=AttendanceService.build_summary(records),
        )

    @staticmethod
    async def get_month_summary(
        db: AsyncSession,
        employee_id: uuid.UUID,
        year: int,
        month: int,
    ) -> AttendanceSummary:
        """Totals for one calendar month. Does not check the employee exists."""
        first_day, last_day = month_bounds(year, month)
        records = await AttendanceService._records_between(
            db, employee_id, first_day, last_day,
        )
        return AttendanceService.build_summary(records)
