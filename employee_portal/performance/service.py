"""Performance service — KPI snapshots, review history and self-assessment."""

from __future__ import annotations

import logging
import re
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from employee_portal.common.clock import utcnow
from employee_portal.common.constants import ACTIVE_REVIEW_STATUSES, ReviewStatus
from employee_portal.common.exceptions import NotFoundException, ValidationException
from employee_portal.core_hr.service import EmployeeService
from employee_portal.performance.models import KPIMetric, PerformanceReview
from employee_portal.performance.schemas import (
    KPIMetricOut,
    KPISummary,
    KPISummaryResponse,
    PerformanceHistoryResponse,
    PerformanceReviewBrief,
    PerformanceTrendPoint,
    SelfAssessmentSubmit,
)

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 5

_PERIOD_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def validate_period(period: str) -> str:
    if not _PERIOD_RE.match(period):
        raise ValidationException({"period": ["Period must be in YYYY-MM format."]})
    return period


class PerformanceService:
    """Async KPI / review queries."""

    @staticmethod
    async def get_kpi_metrics(
        db: AsyncSession,
        employee_id: uuid.UUID,
        period: str,
    ) -> list[KPIMetric]:
        result = await db.execute(
            select(KPIMetric)
            .where(KPIMetric.employee_id == employee_id, KPIMetric.period == period)
            .order_by(KPIMetric.metric_name)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_kpi_summary(
        db: AsyncSession,
        employee_id: uuid.UUID,
        period: str,
    ) -> KPISummaryResponse:
        """Metrics for *period* plus weighted totals.

        ``overall_score`` is ``total_score / total_weightage * 100``, or 0
        when no weightage is recorded.
        """
        validate_period(period)
        await EmployeeService.get_employee_or_404(db, employee_id)

        metrics = await PerformanceService.get_kpi_metrics(db, employee_id, period)
        total_weightage = sum(m.weightage for m in metrics)
        total_score = sum(m.score for m in metrics)
        overall = (total_score / total_weightage) * 100 if total_weightage > 0 else 0.0

        return KPISummaryResponse(
            metrics=[KPIMetricOut.model_validate(m) for m in metrics],
            summary=KPISummary(
                total_metrics=len(metrics),
                total_weightage=total_weightage,
                total_score=total_score,
                overall_score=round(overall, 2),
                period=period,
            ),
        )

    @staticmethod
    async def get_active_review(
        db: AsyncSession,
        employee_id: uuid.UUID,
    ) -> Optional[PerformanceReview]:
        """Most recent review still in DRAFT or SUBMITTED, if any."""
        result = await db.execute(
            select(PerformanceReview)
            .where(
                PerformanceReview.employee_id == employee_id,
                PerformanceReview.status.in_(ACTIVE_REVIEW_STATUSES),
            )
            .order_by(PerformanceReview.created_at.desc())
            .limit(1)
        )
        return result.scalars().first()

    @staticmethod
    async def get_review_history(
        db: AsyncSession,
        employee_id: uuid.UUID,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> PerformanceHistoryResponse:
        """Latest *limit* reviews by period, with the score/rating trend."""
        await EmployeeService.get_employee_or_404(db, employee_id)

        result = await db.execute(
            select(PerformanceReview)
            .where(PerformanceReview.employee_id == employee_id)
            .order_by(PerformanceReview.review_period.desc(), PerformanceReview.created_at.desc())
            .limit(limit)
        )
        reviews = list(result.scalars().all())

        return PerformanceHistoryResponse(
            reviews=[PerformanceReviewBrief.model_validate(r) for r in reviews],
            performance_trend=[
                PerformanceTrendPoint(
                    period=r.review_period,
                    score=r.overall_score,
                    rating=r.overall_rating,
                )
                for r in reviews
            ],
            total_reviews=len(reviews),
        )

    @staticmethod
    async def get_review(
        db: AsyncSession,
        employee_id: uuid.UUID,
        review_id: uuid.UUID,
    ) -> PerformanceReview:
        """A review owned by *employee_id*.

        Someone else's review is reported as missing, same as an unknown id.
        """
        await EmployeeService.get_employee_or_404(db, employee_id)

        result = await db.execute(
            select(PerformanceReview).where(
                PerformanceReview.id == review_id,
                PerformanceReview.employee_id == employee_id,
            )
        )
        review = result.scalars().first()
        if review is None:
            raise NotFoundException("Performance review", review_id)
        return review

    @staticmethod
    async def submit_self_assessment(
        db: AsyncSession,
        employee_id: uuid.UUID,
        review_id: uuid.UUID,
        data: SelfAssessmentSubmit,
    ) -> PerformanceReview:
        review = await PerformanceService.get_review(db, employee_id, review_id)

        if review.status != ReviewStatus.DRAFT:
            raise ValidationException({
                "status": [
                    "Self-assessment can only be submitted for draft reviews "
                    f"(current status: {review.status.value})."
                ],
            })

        review.self_assessment = data.responses
        review.self_ratings = data.self_ratings
        review.self_comments = data.comments
        review.status = ReviewStatus.SUBMITTED
        review.submitted_at = utcnow()
        await db.flush()

        logger.info("Self-assessment submitted for review %s by employee %s", review_id, employee_id)
        return review
