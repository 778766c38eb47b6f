"""Enums and constants for the employee portal — matching the stored enum labels."""

from __future__ import annotations

import enum


# ── Leave ───────────────────────────────────────────────────────────

class LeaveType(str, enum.Enum):
    CASUAL = "CASUAL"
    SICK = "SICK"
    EARNED = "EARNED"
    MATERNITY = "MATERNITY"
    PATERNITY = "PATERNITY"
    COMPENSATORY = "COMPENSATORY"


class LeaveStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


# Statuses that count against the annual allotment
BALANCE_CONSUMING_STATUSES: tuple[LeaveStatus, ...] = (
    LeaveStatus.PENDING,
    LeaveStatus.APPROVED,
)

# Standard annual allocation (days)
DEFAULT_LEAVE_ENTITLEMENTS: dict[LeaveType, int] = {
    LeaveType.CASUAL: 12,
    LeaveType.SICK: 12,
    LeaveType.EARNED: 21,
    LeaveType.MATERNITY: 180,
    LeaveType.PATERNITY: 15,
    LeaveType.COMPENSATORY: 0,
}


# ── Notifications ───────────────────────────────────────────────────

class NotificationSeverity(str, enum.Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


# ── Performance / Payroll ───────────────────────────────────────────

class ReviewStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    COMPLETED = "COMPLETED"


ACTIVE_REVIEW_STATUSES: tuple[ReviewStatus, ...] = (
    ReviewStatus.DRAFT,
    ReviewStatus.SUBMITTED,
)


class PayrollStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PROCESSED = "PROCESSED"


# ── Misc constants ──────────────────────────────────────────────────

PERIOD_FORMAT = "%Y-%m"           # KPI / payroll period key: 2024-06
MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20
