"""Notification audience resolution.

A notification's three target lists are parsed once into an ``Audience``:

  - ``GlobalAudience``   — every target list is empty; everyone sees it.
  - ``TargetedAudience`` — visible when the viewer's id, department, or
    branch appears in the matching list (any single match is enough).

Expiry is checked before targeting: an expired notification is invisible
to everyone, including global ones.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Optional, Union

from employee_portal.common.clock import as_utc, utcnow


@dataclass(frozen=True)
class AudienceViewer:
    """The employee attributes targeting is matched against."""

    employee_id: str
    department: Optional[str]
    branch_id: Optional[str]

    @classmethod
    def from_employee(cls, employee: Any) -> "AudienceViewer":
        return cls(
            employee_id=str(employee.id),
            department=employee.department,
            branch_id=str(employee.branch_id) if employee.branch_id else None,
        )


@dataclass(frozen=True)
class GlobalAudience:
    def includes(self, viewer: AudienceViewer) -> bool:
        return True


@dataclass(frozen=True)
class TargetedAudience:
    employees: frozenset[str] = frozenset()
    departments: frozenset[str] = frozenset()
    branches: frozenset[str] = frozenset()

    def includes(self, viewer: AudienceViewer) -> bool:
        return (
            viewer.employee_id in self.employees
            or (viewer.department is not None and viewer.department in self.departments)
            or (viewer.branch_id is not None and viewer.branch_id in self.branches)
        )


Audience = Union[GlobalAudience, TargetedAudience]


def parse_target_list(raw: Any) -> frozenset[str]:
    """Normalise a stored target list to a set of strings.

    Accepts ``None``, a list, or a JSON-encoded list (older rows stored
    the serialised string). Ids are compared as strings.
    """
    if raw is None or raw == "":
        return frozenset()
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            return frozenset({raw})
        if raw is None:
            return frozenset()
        if isinstance(raw, str):
            return frozenset({raw})
    if not isinstance(raw, (list, tuple, set, frozenset)):
        return frozenset({str(raw)})
    return frozenset(str(item) for item in raw if item is not None)


def build_audience(
    employees: Any = None,
    departments: Any = None,
    branches: Any = None,
) -> Audience:
    targeted = TargetedAudience(
        employees=parse_target_list(employees),
        departments=parse_target_list(departments),
        branches=parse_target_list(branches),
    )
    if not (targeted.employees or targeted.departments or targeted.branches):
        return GlobalAudience()
    return targeted


def resolve_audience(notification: Any) -> Audience:
    """Decide the audience of a stored notification."""
    return build_audience(
        notification.target_employees,
        notification.target_departments,
        notification.target_branches,
    )


def is_expired(notification: Any, now: Optional[datetime] = None) -> bool:
    """True when ``expires_at`` is set and at or before *now*."""
    expires_at = as_utc(notification.expires_at)
    if expires_at is None:
        return False
    return expires_at <= (now or utcnow())


def is_visible(
    notification: Any,
    viewer: AudienceViewer,
    now: Optional[datetime] = None,
) -> bool:
    """Expiry first, then targeting."""
    if is_expired(notification, now):
        return False
    return resolve_audience(notification).includes(viewer)


def serialize_targets(values: Optional[Iterable[Union[str, uuid.UUID]]]) -> Optional[list[str]]:
    """Form stored on write: ``None`` for absent or empty lists."""
    if not values:
        return None
    return [str(v) for v in values]
