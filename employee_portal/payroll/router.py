"""Payroll router — payslip list and single-period payslip."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from employee_portal.common.pagination import PaginationParams
from employee_portal.database import get_db
from employee_portal.payroll.schemas import PayslipListResponse, PayslipOut
from employee_portal.payroll.service import PayrollService

router = APIRouter(prefix="", tags=["payroll"])


@router.get("/{employee_id}/payslips", response_model=PayslipListResponse)
async def list_payslips(
    employee_id: uuid.UUID,
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    """Processed payslips, newest first."""
    return await PayrollService.list_payslips(db, employee_id, pagination)


@router.get("/{employee_id}/payslips/{period}", response_model=PayslipOut)
async def get_payslip(
    employee_id: uuid.UUID,
    period: str,
    db: AsyncSession = Depends(get_db),
):
    """Salary slip for a ``YYYY-MM`` period."""
    return await PayrollService.get_payslip(db, employee_id, period)
