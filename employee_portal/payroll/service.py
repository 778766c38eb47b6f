"""Payroll service layer — processed payslips visible to the employee."""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_portal.common.constants import PayrollStatus
from employee_portal.common.exceptions import NotFoundException, ValidationException
from employee_portal.common.pagination import PaginationParams, paginate
from employee_portal.core_hr.service import EmployeeService
from employee_portal.payroll.models import PayrollRecord
from employee_portal.payroll.schemas import PayslipListResponse, PayslipOut
from employee_portal.performance.service import validate_period


class PayrollService:
    """Business logic for payslip access."""

    @staticmethod
    async def list_payslips(
        db: AsyncSession,
        employee_id: uuid.UUID,
        pagination: PaginationParams,
    ) -> PayslipListResponse:
        """PROCESSED payslips, newest period first."""
        await EmployeeService.get_employee_or_404(db, employee_id)

        stmt = (
            select(PayrollRecord)
            .where(
                PayrollRecord.employee_id == employee_id,
                PayrollRecord.status == PayrollStatus.PROCESSED,
            )
            .order_by(PayrollRecord.period.desc())
        )
        rows, meta = await paginate(db, stmt, pagination)
        return PayslipListResponse(
            data=[PayslipOut.model_validate(r) for r in rows],
            meta=meta,
        )

    @staticmethod
    async def get_payslip(
        db: AsyncSession,
        employee_id: uuid.UUID,
        period: str,
    ) -> PayrollRecord:
        """Payslip for one period. Drafts are not released."""
        validate_period(period)
        stmt = select(PayrollRecord).where(
            PayrollRecord.employee_id == employee_id,
            PayrollRecord.period == period,
        )
        record = (await db.execute(stmt)).scalar_one_or_none()
        if record is None:
            raise NotFoundException("Payroll record", f"{employee_id}/{period}")
        if record.status != PayrollStatus.PROCESSED:
            raise ValidationException(
                {"period": ["Payroll record is not yet processed."]}
            )
        return record

    @staticmethod
    async def get_latest_payslip(
        db: AsyncSession,
        employee_id: uuid.UUID,
    ) -> Optional[PayrollRecord]:
        stmt = (
            select(PayrollRecord)
            .where(
                PayrollRecord.employee_id == employee_id,
                PayrollRecord.status == PayrollStatus.PROCESSED,
            )
            .order_by(PayrollRecord.period.desc())
            .limit(1)
        )
        return (await db.execute(stmt)).scalars().first()
