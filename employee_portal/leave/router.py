"""Leave router — balance, history, and submission for one employee.

Mounted under ``/api/v1/employees``. The acting employee comes from the
path; authentication is handled upstream.
"""


import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from employee_portal.common import clock
from employee_portal.common.pagination import PaginationParams
from employee_portal.common.rate_limit import WRITE_LIMIT, limiter
from employee_portal.database import get_db
from employee_portal.leave.schemas import (
    LeaveBalanceResponse,
    LeaveRequestCreate,
    LeaveRequestListResponse,
    LeaveRequestOut,
)
from employee_portal.leave.service import LeaveService

router = APIRouter(prefix="", tags=["leave"])


# ── GET /{employee_id}/leave/balance ────────────────────────────────

@router.get("/{employee_id}/leave/balance", response_model=LeaveBalanceResponse)
async def leave_balance(
    employee_id: uuid.UUID,
    year: Optional[int] = Query(None, ge=1900, le=2999, description="Defaults to the current year"),
    db: AsyncSession = Depends(get_db),
):
    """Remaining days per leave type for the given (or current) year."""
    return await LeaveService.get_leave_balance(db, employee_id, year or clock.today().year)


# ── GET /{employee_id}/leave/requests ───────────────────────────────

@router.get("/{employee_id}/leave/requests", response_model=LeaveRequestListResponse)
async def leave_requests(
    employee_id: uuid.UUID,
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    """Leave request history, newest first (paginated)."""
    return await LeaveService.list_leave_requests(db, employee_id, pagination)


# ── POST /{employee_id}/leave/requests ──────────────────────────────

@router.post(
    "/{employee_id}/leave/requests",
    response_model=LeaveRequestOut,
    status_code=201,
)
@limiter.limit(WRITE_LIMIT)
async def submit_leave_request(
    request: Request,
    employee_id: uuid.UUID,
    body: LeaveRequestCreate,
    db: AsyncSession = Depends(get_db),
):
    """Submit a leave request. Checks the current-year balance first."""
    return await LeaveService.submit_leave_request(db, employee_id, body)
