"""Time helpers — "now" in UTC, "today" in the configured business timezone."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Annotated, Optional
from zoneinfo import ZoneInfo

from pydantic import AfterValidator

from employee_portal.common.constants import PERIOD_FORMAT
from employee_portal.config import settings


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def today() -> date:
    """Current date in the business timezone (``settings.TIMEZONE``)."""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).date()


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive timestamps (SQLite drops the offset on storage)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def period_key(day: date) -> str:
    """``YYYY-MM`` period key used by KPI and payroll records."""
    return day.strftime(PERIOD_FORMAT)


# Response field type: stored timestamps always serialize with an offset.
UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]
