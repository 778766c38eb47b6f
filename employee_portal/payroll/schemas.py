"""Payroll Pydantic schemas."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from employee_portal.common.constants import PayrollStatus
from employee_portal.common.pagination import PaginatedResponse


class PayslipOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    period: str
    basic_salary: float
    allowances: float
    overtime: float
    gross_salary: float
    pf_deduction: float
    esi_deduction: float
    tax_deduction: float
    other_deductions: float
    net_salary: float
    status: PayrollStatus
    processed_at: Optional[datetime] = None


class PayslipListResponse(PaginatedResponse[PayslipOut]):
    """Processed payslips, newest period first."""
