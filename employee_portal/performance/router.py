"""Performance router — KPI summary, review history, self-assessment."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from employee_portal.common import clock
from employee_portal.common.rate_limit import WRITE_LIMIT, limiter
from employee_portal.database import get_db
from employee_portal.performance.schemas import (
    KPISummaryResponse,
    PerformanceHistoryResponse,
    PerformanceReviewOut,
    SelfAssessmentSubmit,
)
from employee_portal.performance.service import DEFAULT_HISTORY_LIMIT, PerformanceService

router = APIRouter(prefix="", tags=["performance"])


@router.get("/{employee_id}/kpi", response_model=KPISummaryResponse)
async def kpi_summary(
    employee_id: uuid.UUID,
    period: Optional[str] = Query(None, description="YYYY-MM; defaults to the current month"),
    db: AsyncSession = Depends(get_db),
):
    """KPI metrics and weighted score for one period."""
    return await PerformanceService.get_kpi_summary(
        db, employee_id, period or clock.period_key(clock.today()),
    )


@router.get("/{employee_id}/reviews", response_model=PerformanceHistoryResponse)
async def review_history(
    employee_id: uuid.UUID,
    limit: int = Query(DEFAULT_HISTORY_LIMIT, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
):
    return await PerformanceService.get_review_history(db, employee_id, limit)


@router.get("/{employee_id}/reviews/{review_id}", response_model=PerformanceReviewOut)
async def get_review(
    employee_id: uuid.UUID,
    review_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """One of the employee's own reviews."""
    return await PerformanceService.get_review(db, employee_id, review_id)


@router.put(
    "/{employee_id}/reviews/{review_id}/self-assessment",
    response_model=PerformanceReviewOut,
)
@limiter.limit(WRITE_LIMIT)
async def submit_self_assessment(
    request: Request,
    employee_id: uuid.UUID,
    review_id: uuid.UUID,
    body: SelfAssessmentSubmit,
    db: AsyncSession = Depends(get_db),
):
    """Submit the self-assessment of a DRAFT review; it becomes SUBMITTED."""
    return await PerformanceService.submit_self_assessment(db, employee_id, review_id, body)
