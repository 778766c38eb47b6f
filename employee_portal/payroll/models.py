"""Payroll ORM model: PayrollRecord (one payslip per employee per period).

SQLAlchemy 2.0 async-compatible models.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from employee_portal.common.constants import PayrollStatus
from employee_portal.database import Base


class PayrollRecord(Base):
    """Monthly payslip. Only PROCESSED records are shown to employees."""

    __tablename__ = "payroll_records"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "period", name="uq_payroll_emp_period"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("employees.id"),
        nullable=False,
    )
    period: Mapped[str] = mapped_column(sa.String(7), nullable=False)
    basic_salary: Mapped[float] = mapped_column(sa.Float, default=0.0)
    allowances: Mapped[float] = mapped_column(sa.Float, default=0.0)
    overtime: Mapped[float] = mapped_column(sa.Float, default=0.0)
    gross_salary: Mapped[float] = mapped_column(sa.Float, default=0.0)
    pf_deduction: Mapped[float] = mapped_column(sa.Float, default=0.0)
    esi_deduction: Mapped[float] = mapped_column(sa.Float, default=0.0)
    tax_deduction: Mapped[float] = mapped_column(sa.Float, default=0.0)
    other_deductions: Mapped[float] = mapped_column(sa.Float, default=0.0)
    net_salary: Mapped[float] = mapped_column(sa.Float, default=0.0)
    status: Mapped[PayrollStatus] = mapped_column(
        sa.Enum(PayrollStatus, name="payroll_status"),
        default=PayrollStatus.DRAFT,
        nullable=False,
    )
    processed_at: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<PayrollRecord {self.period} {self.status.value}>"
