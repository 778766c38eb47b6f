"""Notification endpoints — employee feed, mark read, HR broadcast."""


import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from employee_portal.common.pagination import PaginationParams
from employee_portal.common.rate_limit import WRITE_LIMIT, limiter
from employee_portal.database import get_db
from employee_portal.notifications.schemas import (
    NotificationCreate,
    NotificationListResponse,
    NotificationOut,
    NotificationReadOut,
)
from employee_portal.notifications.service import NotificationService

# Mounted under /api/v1/employees
employee_router = APIRouter(prefix="", tags=["notifications"])

# Mounted under /api/v1/notifications
router = APIRouter(prefix="", tags=["notifications"])


# ── GET /{employee_id}/notifications — visible feed ─────────────────

@employee_router.get(
    "/{employee_id}/notifications",
    response_model=NotificationListResponse,
)
async def list_notifications(
    employee_id: uuid.UUID,
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    """Notifications visible to the employee, newest first (paginated)."""
    return await NotificationService.list_notifications(db, employee_id, pagination)


# ── PUT /{employee_id}/notifications/{notification_id}/read ─────────

@employee_router.put(
    "/{employee_id}/notifications/{notification_id}/read",
    response_model=NotificationReadOut,
)
async def mark_read(
    employee_id: uuid.UUID,
    notification_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Mark a notification as read. Repeating the call changes nothing."""
    return await NotificationService.mark_read(db, employee_id, notification_id)


# ── POST / — create broadcast (HR/Admin) ────────────────────────────

@router.post("", response_model=NotificationOut, status_code=201)
@limiter.limit(WRITE_LIMIT)
async def create_notification(
    request: Request,
    body: NotificationCreate,
    created_by: Optional[str] = Header(None, alias="X-Created-By"),
    db: AsyncSession = Depends(get_db),
):
    """Create a notification. Empty target lists make it global."""
    return await NotificationService.create_notification(db, body, created_by)
