"""Dashboard Pydantic v2 schemas — the employee self-service dashboard."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from employee_portal.attendance.schemas import AttendanceSummary
from employee_portal.core_hr.schemas import EmployeeBrief
from employee_portal.leave.schemas import LeaveBalanceItem, LeaveRequestOut
from employee_portal.notifications.schemas import NotificationFeedItem
from employee_portal.payroll.schemas import PayslipOut
from employee_portal.performance.schemas import KPIMetricOut, PerformanceReviewBrief


class EmployeeDashboardResponse(BaseModel):
    """Everything the portal home page shows, built in one call."""

    employee: EmployeeBrief
    attendance_summary: AttendanceSummary = Field(
        ..., description="Current calendar month"
    )
    pending_leave_requests: list[LeaveRequestOut] = Field(
        default_factory=list, description="Newest PENDING requests (max 5)"
    )
    leave_balance: list[LeaveBalanceItem] = Field(
        default_factory=list, description="Current year, one item per leave type"
    )
    kpi_metrics: list[KPIMetricOut] = Field(
        default_factory=list, description="Current YYYY-MM period"
    )
    active_performance_review: Optional[PerformanceReviewBrief] = None
    latest_payslip: Optional[PayslipOut] = None
    recent_notifications: list[NotificationFeedItem] = Field(
        default_factory=list, description="First page of the visible feed (max 5)"
    )
