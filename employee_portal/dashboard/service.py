"""Dashboard service — read-only aggregation across the self-service modules.

All methods are static async, following the project convention. The
sub-reads share the request's session and run one after another
(``AsyncSession`` does not allow concurrent use). The response is built
only after every read has finished; any failure aborts the whole dashboard.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from employee_portal.attendance.service import AttendanceService
from employee_portal.common import clock
from employee_portal.common.pagination import PaginationParams
from employee_portal.config import settings
from employee_portal.core_hr.schemas import EmployeeBrief
from employee_portal.core_hr.service import EmployeeService
from employee_portal.dashboard.schemas import EmployeeDashboardResponse
from employee_portal.leave.schemas import LeaveRequestOut
from employee_portal.leave.service import LeaveService
from employee_portal.notifications.service import NotificationService
from employee_portal.payroll.schemas import PayslipOut
from employee_portal.payroll.service import PayrollService
from employee_portal.performance.schemas import KPIMetricOut, PerformanceReviewBrief
from employee_portal.performance.service import PerformanceService

logger = logging.getLogger(__name__)


class DashboardService:
    """Async dashboard aggregation for a single employee."""

    @staticmethod
    async def get_employee_dashboard(
        db: AsyncSession,
        employee_id: uuid.UUID,
    ) -> EmployeeDashboardResponse:
        """Compose the employee's dashboard read model."""
        employee = await EmployeeService.get_employee_or_404(db, employee_id)

        today = clock.today()
        limit = settings.DASHBOARD_RECENT_LIMIT

        try:
            attendance = await AttendanceService.get_month_summary(
                db, employee_id, today.year, today.month,
            )
            pending = await LeaveService.get_pending_requests(db, employee_id, limit)
            kpi_metrics = await PerformanceService.get_kpi_metrics(
                db, employee_id, clock.period_key(today),
            )
            review = await PerformanceService.get_active_review(db, employee_id)
            payslip = await PayrollService.get_latest_payslip(db, employee_id)
            balance = await LeaveService.get_leave_balance(db, employee_id, today.year)
            notifications = await NotificationService.list_notifications(
                db, employee_id, PaginationParams.of(page=1, page_size=limit),
            )
        except Exception:
            logger.exception("Error building dashboard for employee %s", employee_id)
            raise

        return EmployeeDashboardResponse(
            employee=EmployeeBrief.model_validate(employee),
            attendance_summary=attendance,
            pending_leave_requests=[LeaveRequestOut.model_validate(r) for r in pending],
            leave_balance=balance.balances,
            kpi_metrics=[KPIMetricOut.model_validate(m) for m in kpi_metrics],
            active_performance_review=(
                PerformanceReviewBrief.model_validate(review) if review else None
            ),
            latest_payslip=PayslipOut.model_validate(payslip) if payslip else None,
            recent_notifications=notifications.data,
        )
