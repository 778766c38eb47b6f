"""Notification Pydantic schemas for request / response validation."""


import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from employee_portal.common.clock import UTCDateTime
from employee_portal.common.constants import NotificationSeverity
from employee_portal.common.pagination import PaginationMeta


# ── Requests ────────────────────────────────────────────────────────

class NotificationCreate(BaseModel):
    """HR/Admin broadcast. Leave every target list empty for a global notice."""

    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    severity: NotificationSeverity = NotificationSeverity.INFO
    target_employees: list[uuid.UUID] = Field(default_factory=list)
    target_departments: list[str] = Field(default_factory=list)
    target_branches: list[uuid.UUID] = Field(default_factory=list)
    expires_at: Optional[datetime] = None


# ── Responses ───────────────────────────────────────────────────────

class NotificationOut(BaseModel):
    """Stored notification, as returned to HR after creation."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    message: str
    severity: NotificationSeverity
    target_employees: Optional[list[str]] = None
    target_departments: Optional[list[str]] = None
    target_branches: Optional[list[str]] = None
    expires_at: Optional[UTCDateTime] = None
    created_by: Optional[str] = None
    created_at: UTCDateTime


class NotificationFeedItem(BaseModel):
    """A visible notification in an employee's feed, with read state."""

    id: uuid.UUID
    title: str
    message: str
    severity: NotificationSeverity
    expires_at: Optional[UTCDateTime] = None
    created_at: UTCDateTime
    is_read: bool = False
    read_at: Optional[UTCDateTime] = None


class NotificationListMeta(PaginationMeta):
    """Extends standard pagination meta with unread count."""

    unread: int


class NotificationListResponse(BaseModel):
    """Paginated list of visible notifications with unread count in meta."""

    data: list[NotificationFeedItem]
    meta: NotificationListMeta


class NotificationReadOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    notification_id: uuid.UUID
    read_at: UTCDateTime
