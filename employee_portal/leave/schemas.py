"""Leave Pydantic v2 schemas — request / response validation.

Naming conventions:
  - *Create  → request bodies (write)
  - *Out / *Response → response bodies (read)
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from employee_portal.common.constants import LeaveStatus, LeaveType
from employee_portal.common.pagination import PaginationMeta


# ═════════════════════════════════════════════════════════════════════
# Leave Balance
# ═════════════════════════════════════════════════════════════════════


class LeaveBalanceItem(BaseModel):
    """Derived balance for one leave type. ``balance`` may be negative."""

    leave_type: LeaveType
    allotted: int
    consumed: int
    balance: int


class LeaveBalanceResponse(BaseModel):
    employee_id: uuid.UUID
    year: int
    balances: list[LeaveBalanceItem]

    def for_type(self, leave_type: LeaveType) -> Optional[LeaveBalanceItem]:
        for item in self.balances:
            if item.leave_type == leave_type:
                return item
        return None


# ═════════════════════════════════════════════════════════════════════
# Leave Request
# ═════════════════════════════════════════════════════════════════════


class LeaveRequestCreate(BaseModel):
    """Body for submitting a leave request.

    ``leave_type`` is a plain string so an unrecognised value reaches the
    service and is reported as an invalid leave type, not a schema error.
    Business checks (non-empty reason, date order) also live in the service.
    """

    leave_type: str = Field(..., description="CASUAL, SICK, EARNED, ...")
    from_date: date
    to_date: date
    reason: str = ""


class LeaveRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    leave_type: LeaveType
    from_date: date
    to_date: date
    days: int
    reason: str
    status: LeaveStatus
    created_at: datetime


class LeaveRequestListResponse(BaseModel):
    data: list[LeaveRequestOut]
    meta: PaginationMeta
