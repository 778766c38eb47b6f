"""Performance Pydantic schemas."""

from __future__ import annotations

import uuid
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from employee_portal.common.clock import UTCDateTime
from employee_portal.common.constants import ReviewStatus


class KPIMetricOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    metric_name: str
    target_value: float
    actual_value: float
    period: str
    weightage: float
    score: float


class KPISummary(BaseModel):
    total_metrics: int
    total_weightage: float
    total_score: float
    overall_score: float
    period: str


class KPISummaryResponse(BaseModel):
    metrics: list[KPIMetricOut]
    summary: KPISummary


class PerformanceReviewBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    review_period: str
    review_type: str
    overall_score: float
    overall_rating: Optional[str] = None
    status: ReviewStatus
    created_at: UTCDateTime


class PerformanceReviewOut(PerformanceReviewBrief):
    """One review with the employee's self-assessment, if submitted."""

    self_assessment: Optional[dict[str, Any]] = None
    self_ratings: Optional[dict[str, float]] = None
    self_comments: Optional[str] = None
    submitted_at: Optional[UTCDateTime] = None


class PerformanceTrendPoint(BaseModel):
    period: str
    score: float
    rating: Optional[str] = None


class PerformanceHistoryResponse(BaseModel):
    reviews: list[PerformanceReviewBrief]
    performance_trend: list[PerformanceTrendPoint]
    total_reviews: int


class SelfAssessmentSubmit(BaseModel):
    """Answers keyed by question, ratings on a 1-5 scale keyed by criterion."""

    responses: dict[str, Any] = Field(..., min_length=1)
    self_ratings: dict[str, Annotated[float, Field(ge=1, le=5)]] = Field(default_factory=dict)
    comments: Optional[str] = Field(None, max_length=2000)
