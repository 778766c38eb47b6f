"""Notification ORM models: Notification (broadcast with targeting), NotificationRead.

A notification is stored once; who can see it is decided at read time from
its target lists (see ``notifications.audience``).
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from employee_portal.common.constants import NotificationSeverity
from employee_portal.database import Base

# JSONB on PostgreSQL, plain JSON elsewhere
TargetList = sa.JSON().with_variant(JSONB(), "postgresql")


class Notification(Base):
    __tablename__ = "employee_notifications"
    __table_args__ = (
        sa.Index("ix_employee_notifications_created_at", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    message: Mapped[str] = mapped_column(sa.Text, nullable=False)
    severity: Mapped[NotificationSeverity] = mapped_column(
        sa.Enum(NotificationSeverity, name="notification_severity"),
        default=NotificationSeverity.INFO,
        nullable=False,
    )
    # NULL / empty on all three → global
    target_employees: Mapped[Optional[list]] = mapped_column(TargetList)
    target_departments: Mapped[Optional[list]] = mapped_column(TargetList)
    target_branches: Mapped[Optional[list]] = mapped_column(TargetList)
    expires_at: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))
    created_by: Mapped[Optional[str]] = mapped_column(sa.String(100))
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


class NotificationRead(Base):
    """Read receipt: at most one per (employee, notification)."""

    __tablename__ = "notification_reads"
    __table_args__ = (
        sa.UniqueConstraint(
            "employee_id", "notification_id", name="uq_notification_read_pair",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
    )
    notification_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("employee_notifications.id", ondelete="CASCADE"),
        nullable=False,
    )
    read_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
