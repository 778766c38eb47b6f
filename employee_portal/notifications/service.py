"""Notification service — broadcast creation, per-employee feed, read receipts."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_portal.common.clock import utcnow
from employee_portal.common.pagination import PaginationParams, paginate_items
from employee_portal.core_hr.service import EmployeeService
from employee_portal.notifications.audience import (
    AudienceViewer,
    is_visible,
    serialize_targets,
)
from employee_portal.notifications.models import Notification, NotificationRead
from employee_portal.notifications.schemas import (
    NotificationCreate,
    NotificationFeedItem,
    NotificationListMeta,
    NotificationListResponse,
)

logger = logging.getLogger(__name__)


class NotificationService:
    """Async notification operations."""

    @staticmethod
    async def create_notification(
        db: AsyncSession,
        data: NotificationCreate,
        created_by: Optional[str] = None,
    ) -> Notification:
        """Store a broadcast. Empty target lists are stored as NULL."""
        notification = Notification(
            title=data.title,
            message=data.message,
            severity=data.severity,
            target_employees=serialize_targets(data.target_employees),
            target_departments=serialize_targets(data.target_departments),
            target_branches=serialize_targets(data.target_branches),
            expires_at=data.expires_at,
            created_by=created_by,
        )
        db.add(notification)
        await db.flush()
        logger.info("Employee notification created: %s (%s)", notification.title, notification.id)
        return notification

    @staticmethod
    async def get_visible_notifications(
        db: AsyncSession,
        viewer: AudienceViewer,
    ) -> list[Notification]:
        """Every notification *viewer* may see, newest first.

        The store query only drops expired rows; targeting is applied here.
        Nothing is cached, so new notifications show up on the next call.
        """
        now = utcnow()
        result = await db.execute(
            select(Notification)
            .where(
                or_(
                    Notification.expires_at.is_(None),
                    Notification.expires_at > now,
                )
            )
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        return [n for n in result.scalars().all() if is_visible(n, viewer, now)]

    @staticmethod
    async def list_notifications(
        db: AsyncSession,
        employee_id: uuid.UUID,
        pagination: PaginationParams,
    ) -> NotificationListResponse:
        """Paginated feed for an employee.

        Paging slices the visible list, and ``meta.total`` is that list's
        length, so the count and the pages never disagree.
        """
        employee = await EmployeeService.get_employee_or_404(db, employee_id)
        visible = await NotificationService.get_visible_notifications(
            db, AudienceViewer.from_employee(employee),
        )

        receipts: dict[uuid.UUID, NotificationRead] = {}
        if visible:
            result = await db.execute(
                select(NotificationRead).where(
                    NotificationRead.employee_id == employee_id,
                    NotificationRead.notification_id.in_([n.id for n in visible]),
                )
            )
            receipts = {r.notification_id: r for r in result.scalars().all()}

        page, total = paginate_items(visible, pagination)
        unread = sum(1 for n in visible if n.id not in receipts)

        return NotificationListResponse(
            data=[
                NotificationFeedItem(
                    id=n.id,
                    title=n.title,
                    message=n.message,
                    severity=n.severity,
                    expires_at=n.expires_at,
                    created_at=n.created_at,
                    is_read=n.id in receipts,
                    read_at=receipts[n.id].read_at if n.id in receipts else None,
                )
                for n in page
            ],
            meta=NotificationListMeta.build(pagination, total, unread=unread),
        )

    @staticmethod
    async def _find_receipt(
        db: AsyncSession,
        employee_id: uuid.UUID,
        notification_id: uuid.UUID,
    ) -> Optional[NotificationRead]:
        result = await db.execute(
            select(NotificationRead).where(
                NotificationRead.employee_id == employee_id,
                NotificationRead.notification_id == notification_id,
            )
        )
        return result.scalars().first()

    @staticmethod
    async def mark_read(
        db: AsyncSession,
        employee_id: uuid.UUID,
        notification_id: uuid.UUID,
    ) -> NotificationRead:
        """Record that *employee_id* read *notification_id*.

        Idempotent: an existing receipt is returned untouched, keeping its
        original ``read_at``. When a concurrent request inserts the receipt
        first, the unique pair constraint rejects ours and the winner's row
        is returned instead.
        """
        existing = await NotificationService._find_receipt(db, employee_id, notification_id)
        if existing is not None:
            return existing

        receipt = NotificationRead(
            employee_id=employee_id,
            notification_id=notification_id,
            read_at=utcnow(),
        )
        try:
            async with db.begin_nested():
                db.add(receipt)
                await db.flush()
        except IntegrityError:
            logger.debug(
                "Read receipt for %s / %s already recorded concurrently",
                employee_id, notification_id,
            )
            winner = await NotificationService._find_receipt(db, employee_id, notification_id)
            if winner is None:
                raise
            return winner

        logger.info("Notification %s marked read by employee %s", notification_id, employee_id)
        return receipt
