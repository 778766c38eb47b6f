"""Leave module test suite — inclusive day counting, balance derivation,
submission validation (reason, date order, leave type, balance), and
request history.

Tests run against SQLite via the shared conftest.py fixtures.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_portal.common.constants import LeaveStatus, LeaveType
from employee_portal.common.exceptions import (
    InsufficientBalanceException,
    InvalidLeaveTypeException,
    NotFoundException,
    ValidationException,
)
from employee_portal.common.pagination import PaginationParams
from employee_portal.config import settings
from employee_portal.leave.models import LeaveRequest
from employee_portal.leave.schemas import LeaveRequestCreate
from employee_portal.leave.service import LeaveService
from tests.conftest import seed_employee


# ═════════════════════════════════════════════════════════════════════
# Helpers
# ═════════════════════════════════════════════════════════════════════


async def _seed_leave(
    db: AsyncSession,
    employee_id: uuid.UUID,
    *,
    leave_type: LeaveType = LeaveType.CASUAL,
    from_date: date,
    to_date: date,
    status: LeaveStatus = LeaveStatus.APPROVED,
    created_at: datetime | None = None,
) -> LeaveRequest:
    lr = LeaveRequest(
        id=uuid.uuid4(),
        employee_id=employee_id,
        leave_type=leave_type,
        from_date=from_date,
        to_date=to_date,
        days=LeaveService.calculate_requested_days(from_date, to_date),
        reason="Seeded",
        status=status,
        created_at=created_at or datetime.now(timezone.utc),
    )
    db.add(lr)
    await db.flush()
    return lr


async def _count_requests(db: AsyncSession, employee_id: uuid.UUID) -> int:
    result = await db.execute(
        select(func.count()).select_from(LeaveRequest).where(
            LeaveRequest.employee_id == employee_id
        )
    )
    return result.scalar_one()


# ═════════════════════════════════════════════════════════════════════
# 1. calculate_requested_days — pure logic (no DB)
# ═════════════════════════════════════════════════════════════════════


class TestCalculateRequestedDays:

    def test_single_day_is_one(self):
        day = date(2024, 6, 1)
        assert LeaveService.calculate_requested_days(day, day) == 1

    def test_range_is_inclusive(self):
        assert LeaveService.calculate_requested_days(date(2024, 6, 10), date(2024, 6, 12)) == 3

    def test_weekends_are_counted(self):
        # Fri → Mon
        assert LeaveService.calculate_requested_days(date(2024, 6, 7), date(2024, 6, 10)) == 4

    def test_spans_month_boundary(self):
        assert LeaveService.calculate_requested_days(date(2024, 2, 28), date(2024, 3, 1)) == 3

    @pytest.mark.parametrize("span", [0, 1, 5, 30, 364])
    def test_days_equal_single_day_plus_span(self, span):
        to_date = date(2024, 12, 31)
        from_date = to_date - timedelta(days=span)
        assert (
            LeaveService.calculate_requested_days(from_date, to_date)
            == LeaveService.calculate_requested_days(to_date, to_date) + span
        )

    def test_inverted_range_rejected(self):
        with pytest.raises(ValidationException):
            LeaveService.calculate_requested_days(date(2024, 6, 12), date(2024, 6, 10))


class TestParseLeaveType:

    def test_enum_passes_through(self):
        assert LeaveService.parse_leave_type(LeaveType.SICK) is LeaveType.SICK

    def test_string_is_case_insensitive(self):
        assert LeaveService.parse_leave_type(" earned ") is LeaveType.EARNED

    def test_unknown_type_rejected(self):
        with pytest.raises(InvalidLeaveTypeException) as exc:
            LeaveService.parse_leave_type("SABBATICAL")
        assert exc.value.leave_type == "SABBATICAL"
        assert "Invalid leave type: SABBATICAL" in exc.value.detail


# ═════════════════════════════════════════════════════════════════════
# 2. Leave balance calculator
# ═════════════════════════════════════════════════════════════════════


class TestLeaveBalance:

    async def test_one_item_per_leave_type(self, db: AsyncSession):
        emp = await seed_employee(db)

        result = await LeaveService.get_leave_balance(db, emp.id, 2024)

        assert result.employee_id == emp.id
        assert result.year == 2024
        assert [b.leave_type for b in result.balances] == list(LeaveType)
        casual = result.for_type(LeaveType.CASUAL)
        assert (casual.allotted, casual.consumed, casual.balance) == (12, 0, 12)
        assert result.for_type(LeaveType.EARNED).allotted == 21
        assert result.for_type(LeaveType.COMPENSATORY).allotted == 0

    async def test_pending_and_approved_consume_rejected_does_not(self, db: AsyncSession):
        emp = await seed_employee(db)
        await _seed_leave(db, emp.id, from_date=date(2024, 3, 4), to_date=date(2024, 3, 6),
                          status=LeaveStatus.APPROVED)          # 3
        await _seed_leave(db, emp.id, from_date=date(2024, 4, 1), to_date=date(2024, 4, 2),
                          status=LeaveStatus.PENDING)           # 2
        await _seed_leave(db, emp.id, from_date=date(2024, 5, 1), to_date=date(2024, 5, 5),
                          status=LeaveStatus.REJECTED)          # ignored

        casual = (await LeaveService.get_leave_balance(db, emp.id, 2024)).for_type(LeaveType.CASUAL)

        assert casual.consumed == 5
        assert casual.balance == casual.allotted - casual.consumed == 7

    async def test_only_requests_starting_in_year_count(self, db: AsyncSession):
        emp = await seed_employee(db)
        await _seed_leave(db, emp.id, from_date=date(2023, 12, 30), to_date=date(2024, 1, 2))
        await _seed_leave(db, emp.id, from_date=date(2024, 12, 31), to_date=date(2025, 1, 1))

        b2024 = (await LeaveService.get_leave_balance(db, emp.id, 2024)).for_type(LeaveType.CASUAL)
        b2023 = (await LeaveService.get_leave_balance(db, emp.id, 2023)).for_type(LeaveType.CASUAL)

        assert b2024.consumed == 2
        assert b2023.consumed == 4

    async def test_types_are_tracked_separately(self, db: AsyncSession):
        emp = await seed_employee(db)
        await _seed_leave(db, emp.id, leave_type=LeaveType.SICK,
                          from_date=date(2024, 2, 1), to_date=date(2024, 2, 2))

        result = await LeaveService.get_leave_balance(db, emp.id, 2024)

        assert result.for_type(LeaveType.SICK).consumed == 2
        assert result.for_type(LeaveType.CASUAL).consumed == 0

    async def test_other_employees_do_not_affect_balance(self, db: AsyncSession):
        emp = await seed_employee(db)
        other = await seed_employee(db, branch_id=emp.branch_id)
        await _seed_leave(db, other.id, from_date=date(2024, 2, 1), to_date=date(2024, 2, 9))

        casual = (await LeaveService.get_leave_balance(db, emp.id, 2024)).for_type(LeaveType.CASUAL)
        assert casual.consumed == 0

    async def test_balance_can_go_negative(self, db: AsyncSession):
        emp = await seed_employee(db)
        await _seed_leave(db, emp.id, from_date=date(2024, 1, 1), to_date=date(2024, 1, 14))

        casual = (await LeaveService.get_leave_balance(db, emp.id, 2024)).for_type(LeaveType.CASUAL)
        assert casual.balance == -2

    async def test_entitlements_come_from_settings(self, db: AsyncSession, monkeypatch):
        monkeypatch.setattr(settings, "LEAVE_ENTITLEMENTS", '{"CASUAL": 8, "compensatory": 2}')
        emp = await seed_employee(db)

        result = await LeaveService.get_leave_balance(db, emp.id, 2024)

        assert result.for_type(LeaveType.CASUAL).allotted == 8
        assert result.for_type(LeaveType.COMPENSATORY).allotted == 2
        assert result.for_type(LeaveType.SICK).allotted == 12

    async def test_unknown_employee(self, db: AsyncSession):
        with pytest.raises(NotFoundException):
            await LeaveService.get_leave_balance(db, uuid.uuid4(), 2024)

    async def test_type_balance_lookup(self, db: AsyncSession):
        emp = await seed_employee(db)
        item = await LeaveService.get_type_balance(db, emp.id, 2024, "SICK")
        assert item.leave_type == LeaveType.SICK
        assert item.balance == 12

    async def test_type_balance_unknown_type(self, db: AsyncSession):
        emp = await seed_employee(db)
        with pytest.raises(InvalidLeaveTypeException):
            await LeaveService.get_type_balance(db, emp.id, 2024, "UNPAID")


# ═════════════════════════════════════════════════════════════════════
# 3. Leave request validator
# ═════════════════════════════════════════════════════════════════════


class TestSubmitLeaveRequest:

    async def test_casual_scenario_twelve_allotted_ten_consumed(self, db: AsyncSession, fixed_today):
        fixed_today(date(2024, 5, 20))
        emp = await seed_employee(db)
        await _seed_leave(db, emp.id, from_date=date(2024, 1, 10), to_date=date(2024, 1, 19))

        created = await LeaveService.submit_leave_request(
            db, emp.id,
            LeaveRequestCreate(
                leave_type="CASUAL",
                from_date=date(2024, 6, 1),
                to_date=date(2024, 6, 1),
                reason="Family function",
            ),
        )
        assert created.status == LeaveStatus.PENDING
        assert created.days == 1
        assert created.leave_type == LeaveType.CASUAL

        casual = (await LeaveService.get_leave_balance(db, emp.id, 2024)).for_type(LeaveType.CASUAL)
        assert casual.consumed == 11

        with pytest.raises(InsufficientBalanceException) as exc:
            await LeaveService.submit_leave_request(
                db, emp.id,
                LeaveRequestCreate(
                    leave_type="CASUAL",
                    from_date=date(2024, 6, 10),
                    to_date=date(2024, 6, 12),
                    reason="Trip",
                ),
            )
        assert exc.value.available == 1
        assert exc.value.requested == 3
        assert exc.value.detail == (
            "Insufficient leave balance. Available: 1 days, Requested: 3 days"
        )
        assert await _count_requests(db, emp.id) == 2

    async def test_december_request_for_january_checks_current_year(
        self, db: AsyncSession, fixed_today,
    ):
        fixed_today(date(2024, 12, 20))
        emp = await seed_employee(db)
        await _seed_leave(db, emp.id, from_date=date(2024, 3, 4), to_date=date(2024, 3, 13))

        # 2025 is untouched, but the check runs against 2024's two remaining days
        with pytest.raises(InsufficientBalanceException) as exc:
            await LeaveService.submit_leave_request(
                db, emp.id,
                LeaveRequestCreate(
                    leave_type="CASUAL",
                    from_date=date(2025, 1, 6),
                    to_date=date(2025, 1, 8),
                    reason="New year trip",
                ),
            )
        assert exc.value.available == 2

        await LeaveService.submit_leave_request(
            db, emp.id,
            LeaveRequestCreate(
                leave_type="CASUAL",
                from_date=date(2025, 1, 6),
                to_date=date(2025, 1, 7),
                reason="New year trip",
            ),
        )

        this_year = (await LeaveService.get_leave_balance(db, emp.id, 2024)).for_type(LeaveType.CASUAL)
        next_year = (await LeaveService.get_leave_balance(db, emp.id, 2025)).for_type(LeaveType.CASUAL)
        assert this_year.consumed == 10
        assert next_year.consumed == 2

    async def test_exact_balance_is_allowed(self, db: AsyncSession, fixed_today):
        fixed_today(date(2024, 1, 2))
        emp = await seed_employee(db)

        created = await LeaveService.submit_leave_request(
            db, emp.id,
            LeaveRequestCreate(
                leave_type="PATERNITY",
                from_date=date(2024, 2, 1),
                to_date=date(2024, 2, 15),
                reason="Newborn",
            ),
        )
        assert created.days == 15

    async def test_exhausted_balance_compared_raw(self, db: AsyncSession, fixed_today):
        fixed_today(date(2024, 3, 1))
        emp = await seed_employee(db)
        await _seed_leave(db, emp.id, from_date=date(2024, 1, 1), to_date=date(2024, 1, 13))

        with pytest.raises(InsufficientBalanceException) as exc:
            await LeaveService.submit_leave_request(
                db, emp.id,
                LeaveRequestCreate(
                    leave_type="CASUAL",
                    from_date=date(2024, 3, 5),
                    to_date=date(2024, 3, 5),
                    reason="Errand",
                ),
            )
        assert exc.value.available == -1
        assert exc.value.requested == 1

    async def test_zero_entitlement_rejects_any_request(self, db: AsyncSession, fixed_today):
        fixed_today(date(2024, 3, 1))
        emp = await seed_employee(db)

        with pytest.raises(InsufficientBalanceException):
            await LeaveService.submit_leave_request(
                db, emp.id,
                LeaveRequestCreate(
                    leave_type="COMPENSATORY",
                    from_date=date(2024, 3, 5),
                    to_date=date(2024, 3, 5),
                    reason="Worked Sunday",
                ),
            )
        assert await _count_requests(db, emp.id) == 0

    async def test_empty_reason_rejected(self, db: AsyncSession):
        emp = await seed_employee(db)
        with pytest.raises(ValidationException) as exc:
            await LeaveService.submit_leave_request(
                db, emp.id,
                LeaveRequestCreate(
                    leave_type="CASUAL",
                    from_date=date(2024, 3, 5),
                    to_date=date(2024, 3, 5),
                    reason="   ",
                ),
            )
        assert "reason" in exc.value.errors

    async def test_inverted_dates_rejected(self, db: AsyncSession):
        emp = await seed_employee(db)
        with pytest.raises(ValidationException) as exc:
            await LeaveService.submit_leave_request(
                db, emp.id,
                LeaveRequestCreate(
                    leave_type="CASUAL",
                    from_date=date(2024, 3, 6),
                    to_date=date(2024, 3, 5),
                    reason="Oops",
                ),
            )
        assert "to_date" in exc.value.errors
        assert await _count_requests(db, emp.id) == 0

    async def test_invalid_leave_type(self, db: AsyncSession):
        emp = await seed_employee(db)
        with pytest.raises(InvalidLeaveTypeException):
            await LeaveService.submit_leave_request(
                db, emp.id,
                LeaveRequestCreate(
                    leave_type="BEREAVEMENT",
                    from_date=date(2024, 3, 5),
                    to_date=date(2024, 3, 5),
                    reason="Funeral",
                ),
            )

    async def test_unknown_employee(self, db: AsyncSession):
        with pytest.raises(NotFoundException):
            await LeaveService.submit_leave_request(
                db, uuid.uuid4(),
                LeaveRequestCreate(
                    leave_type="CASUAL",
                    from_date=date(2024, 3, 5),
                    to_date=date(2024, 3, 5),
                    reason="Errand",
                ),
            )


# ═════════════════════════════════════════════════════════════════════
# 4. History
# ═════════════════════════════════════════════════════════════════════


class TestLeaveHistory:

    async def test_newest_first_with_pagination(self, db: AsyncSession):
        emp = await seed_employee(db)
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for i in range(5):
            await _seed_leave(
                db, emp.id,
                from_date=date(2024, 2, 1 + i), to_date=date(2024, 2, 1 + i),
                created_at=base + timedelta(days=i),
            )

        page1 = await LeaveService.list_leave_requests(db, emp.id, PaginationParams.of(1, 2))
        page3 = await LeaveService.list_leave_requests(db, emp.id, PaginationParams.of(3, 2))

        assert [r.from_date for r in page1.data] == [date(2024, 2, 5), date(2024, 2, 4)]
        assert page1.meta.total == 5
        assert page1.meta.total_pages == 3
        assert page1.meta.has_next is True
        assert [r.from_date for r in page3.data] == [date(2024, 2, 1)]
        assert page3.meta.has_next is False

    async def test_pending_requests_limited(self, db: AsyncSession):
        emp = await seed_employee(db)
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for i in range(4):
            await _seed_leave(
                db, emp.id,
                from_date=date(2024, 3, 1 + i), to_date=date(2024, 3, 1 + i),
                status=LeaveStatus.PENDING,
                created_at=base + timedelta(hours=i),
            )
        await _seed_leave(db, emp.id, from_date=date(2024, 4, 1), to_date=date(2024, 4, 1),
                          status=LeaveStatus.APPROVED, created_at=base + timedelta(days=5))

        pending = await LeaveService.get_pending_requests(db, emp.id, limit=3)

        assert len(pending) == 3
        assert all(r.status == LeaveStatus.PENDING for r in pending)
        assert pending[0].from_date == date(2024, 3, 4)
