"""Attendance Pydantic schemas."""

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class AttendanceRecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    date: date
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    is_present: bool
    working_hours: Optional[float] = None
    overtime_hours: Optional[float] = None
    remarks: Optional[str] = None


class AttendanceSummary(BaseModel):
    """Totals over a set of attendance records."""

    total_days: int = 0
    present_days: int = 0
    total_working_hours: float = 0.0
    total_overtime_hours: float = 0.0


class AttendanceHistoryResponse(BaseModel):
    employee_id: uuid.UUID
    from_date: date
    to_date: date
    data: list[AttendanceRecordOut]
    summary: AttendanceSummary
