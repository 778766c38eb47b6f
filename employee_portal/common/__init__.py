"""Common module — shared utilities for the employee portal."""

from employee_portal.common.constants import (
    ACTIVE_REVIEW_STATUSES,
    BALANCE_CONSUMING_STATUSES,
    DEFAULT_LEAVE_ENTITLEMENTS,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PERIOD_FORMAT,
    LeaveStatus,
    LeaveType,
    NotificationSeverity,
    PayrollStatus,
    ReviewStatus,
)
from employee_portal.common.exceptions import (
    AppException,
    InsufficientBalanceException,
    InvalidLeaveTypeException,
    NotFoundException,
    ValidationException,
    register_exception_handlers,
)
from employee_portal.common.pagination import (
    PaginatedResponse,
    PaginationMeta,
    PaginationParams,
    paginate,
    paginate_items,
)

__all__ = [
    # Constants / Enums
    "ACTIVE_REVIEW_STATUSES",
    "BALANCE_CONSUMING_STATUSES",
    "DEFAULT_LEAVE_ENTITLEMENTS",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "PERIOD_FORMAT",
    "LeaveStatus",
    "LeaveType",
    "NotificationSeverity",
    "PayrollStatus",
    "ReviewStatus",
    # Exceptions
    "AppException",
    "InsufficientBalanceException",
    "InvalidLeaveTypeException",
    "NotFoundException",
    "ValidationException",
    "register_exception_handlers",
    # Pagination
    "PaginatedResponse",
    "PaginationMeta",
    "PaginationParams",
    "paginate",
    "paginate_items",
]
