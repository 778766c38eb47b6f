"""Leave service layer — balance calculator and leave request validator.

Business logic:
  - Balance per leave type for a year: allotted (configuration) minus the
    days of PENDING/APPROVED requests starting in that year
  - Submission: shape checks, inclusive day count, balance check, insert

Known race: the balance check and the insert in ``submit_leave_request``
are not atomic. Two concurrent submissions by the same employee can both
pass against the same balance and together overdraw it. This is accepted
behaviour; closing it needs a lock or an optimistic check keyed on
(employee_id, leave_type, year).

Year mismatch: the submission check reads the balance of the current
business year (``clock.today()``), while consumption is bucketed by the
year of ``from_date``. A request filed in December for January leave is
checked against this year's balance but draws down next year's.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Union

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_portal.common import clock
from employee_portal.common.constants import (
    BALANCE_CONSUMING_STATUSES,
    LeaveStatus,
    LeaveType,
)
from employee_portal.common.exceptions import (
    InsufficientBalanceException,
    InvalidLeaveTypeException,
    ValidationException,
)
from employee_portal.common.pagination import PaginationParams, paginate
from employee_portal.config import settings
from employee_portal.core_hr.service import EmployeeService
from employee_portal.leave.models import LeaveRequest
from employee_portal.leave.schemas import (
    LeaveBalanceItem,
    LeaveBalanceResponse,
    LeaveRequestCreate,
    LeaveRequestListResponse,
    LeaveRequestOut,
)

logger = logging.getLogger(__name__)


class LeaveService:
    """Async leave operations: balances, submission, history."""

    # ─────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def calculate_requested_days(from_date: date, to_date: date) -> int:
        """Inclusive day count: ``(to_date - from_date).days + 1``.

        Every calendar day counts; weekends and holidays are not excluded.
        """
        days = (to_date - from_date).days + 1
        if days < 1:
            raise ValidationException(
                {"to_date": ["End date must be on or after start date."]}
            )
        return days

    @staticmethod
    def parse_leave_type(value: Union[LeaveType, str]) -> LeaveType:
        """Coerce *value* to a ``LeaveType`` or raise ``InvalidLeaveTypeException``."""
        if isinstance(value, LeaveType):
            return value
        try:
            return LeaveType(str(value).strip().upper())
        except ValueError:
            raise InvalidLeaveTypeException(value) from None

    # ─────────────────────────────────────────────────────────────────
    # Balance
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def get_leave_balance(
        db: AsyncSession,
        employee_id: uuid.UUID,
        year: int,
    ) -> LeaveBalanceResponse:
        """Derive the per-type balance for *employee_id* in *year*.

        One item per ``LeaveType``, in enum order. Rejected requests are
        ignored. ``balance`` is not clamped and can be negative.
        """
        await EmployeeService.get_employee_or_404(db, employee_id)

        result = await db.execute(
            select(LeaveRequest.leave_type, func.coalesce(func.sum(LeaveRequest.days), 0))
            .where(
                LeaveRequest.employee_id == employee_id,
                LeaveRequest.status.in_(BALANCE_CONSUMING_STATUSES),
                LeaveRequest.from_date >= date(year, 1, 1),
                LeaveRequest.from_date <= date(year, 12, 31),
            )
            .group_by(LeaveRequest.leave_type)
        )
        consumed_by_type: dict[LeaveType, int] = {
            leave_type: int(total) for leave_type, total in result.all()
        }

        entitlements = settings.leave_entitlements
        balances = []
        for leave_type in LeaveType:
            allotted = entitlements.get(leave_type, 0)
            consumed = consumed_by_type.get(leave_type, 0)
            balances.append(
                LeaveBalanceItem(
                    leave_type=leave_type,
                    allotted=allotted,
                    consumed=consumed,
                    balance=allotted - consumed,
                )
            )

        return LeaveBalanceResponse(employee_id=employee_id, year=year, balances=balances)

    @staticmethod
    async def get_type_balance(
        db: AsyncSession,
        employee_id: uuid.UUID,
        year: int,
        leave_type: Union[LeaveType, str],
    ) -> LeaveBalanceItem:
        """Balance for a single leave type."""
        balance = await LeaveService.get_leave_balance(db, employee_id, year)
        parsed = LeaveService.parse_leave_type(leave_type)
        item = balance.for_type(parsed)
        if item is None:
            raise InvalidLeaveTypeException(leave_type)
        return item

    # ─────────────────────────────────────────────────────────────────
    # Submission
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def submit_leave_request(
        db: AsyncSession,
        employee_id: uuid.UUID,
        data: LeaveRequestCreate,
    ) -> LeaveRequest:
        """Validate *data* against the current-year balance and create a
        PENDING request.

        Raises:
            ValidationException: empty reason or inverted date range.
            NotFoundException: unknown employee.
            InvalidLeaveTypeException: leave type not recognised.
            InsufficientBalanceException: requested days exceed the balance.
        """
        errors: dict[str, list[str]] = {}
        if not data.reason or not data.reason.strip():
            errors.setdefault("reason", []).append("Reason is required.")
        if data.to_date < data.from_date:
            errors.setdefault("to_date", []).append(
                "End date must be on or after start date."
            )
        if errors:
            raise ValidationException(errors)

        requested_days = LeaveService.calculate_requested_days(data.from_date, data.to_date)

        type_balance = await LeaveService.get_type_balance(
            db, employee_id, clock.today().year, data.leave_type,
        )

        if requested_days > type_balance.balance:
            logger.warning(
                "Leave request rejected for employee %s: %s available %d, requested %d",
                employee_id,
                type_balance.leave_type.value,
                type_balance.balance,
                requested_days,
            )
            raise InsufficientBalanceException(
                available=type_balance.balance,
                requested=requested_days,
            )

        leave_request = LeaveRequest(
            employee_id=employee_id,
            leave_type=type_balance.leave_type,
            from_date=data.from_date,
            to_date=data.to_date,
            days=requested_days,
            reason=data.reason.strip(),
            status=LeaveStatus.PENDING,
        )
        db.add(leave_request)
        await db.flush()

        logger.info(
            "Leave request %s submitted for employee %s (%s, %d day(s))",
            leave_request.id,
            employee_id,
            leave_request.leave_type.value,
            requested_days,
        )
        return leave_request

    # ─────────────────────────────────────────────────────────────────
    # History
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def list_leave_requests(
        db: AsyncSession,
        employee_id: uuid.UUID,
        pagination: PaginationParams,
    ) -> LeaveRequestListResponse:
        """Return the employee's leave requests, newest first."""
        await EmployeeService.get_employee_or_404(db, employee_id)

        query = (
            select(LeaveRequest)
            .where(LeaveRequest.employee_id == employee_id)
            .order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc())
        )
        rows, meta = await paginate(db, query, pagination)
        return LeaveRequestListResponse(
            data=[LeaveRequestOut.model_validate(r) for r in rows],
            meta=meta,
        )

    @staticmethod
    async def get_pending_requests(
        db: AsyncSession,
        employee_id: uuid.UUID,
        limit: int,
    ) -> list[LeaveRequest]:
        """Most recent PENDING requests, newest first."""
        result = await db.execute(
            select(LeaveRequest)
            .where(
                LeaveRequest.employee_id == employee_id,
                LeaveRequest.status == LeaveStatus.PENDING,
            )
            .order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
