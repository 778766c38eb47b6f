"""Performance ORM models: KPIMetric, PerformanceReview."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from employee_portal.common.constants import ReviewStatus
from employee_portal.database import Base

# JSONB on PostgreSQL, plain JSON elsewhere
AssessmentJSON = sa.JSON().with_variant(JSONB(), "postgresql")


class KPIMetric(Base):
    """One KPI line for an employee in a ``YYYY-MM`` period."""

    __tablename__ = "kpi_metrics"
    __table_args__ = (
        sa.Index("ix_kpi_metrics_employee_period", "employee_id", "period"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False,
    )
    metric_name: Mapped[str] = mapped_column(sa.String(200), nullable=False)
    target_value: Mapped[float] = mapped_column(sa.Float, nullable=False)
    actual_value: Mapped[float] = mapped_column(sa.Float, nullable=False)
    period: Mapped[str] = mapped_column(sa.String(7), nullable=False)
    weightage: Mapped[float] = mapped_column(sa.Float, nullable=False)
    score: Mapped[float] = mapped_column(sa.Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<KPIMetric {self.metric_name!r} {self.period}>"


class PerformanceReview(Base):
    """Periodic review. The employee fills in the self-assessment while it
    is DRAFT; submitting it moves the review to SUBMITTED."""

    __tablename__ = "performance_reviews"
    __table_args__ = (
        sa.UniqueConstraint(
            "employee_id", "review_period", "review_type",
            name="uq_review_emp_period_type",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False,
    )
    review_period: Mapped[str] = mapped_column(sa.String(20), nullable=False)
    review_type: Mapped[str] = mapped_column(sa.String(30), nullable=False)
    overall_score: Mapped[float] = mapped_column(sa.Float, default=0.0)
    overall_rating: Mapped[Optional[str]] = mapped_column(sa.String(30))
    status: Mapped[ReviewStatus] = mapped_column(
        sa.Enum(ReviewStatus, name="review_status"),
        default=ReviewStatus.DRAFT,
        nullable=False,
    )
    self_assessment: Mapped[Optional[dict]] = mapped_column(AssessmentJSON)
    self_ratings: Mapped[Optional[dict]] = mapped_column(AssessmentJSON)
    self_comments: Mapped[Optional[str]] = mapped_column(sa.Text)
    submitted_at: Mapped[Optional[datetime]] = mapped_column(sa.DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
    )
