"""Core HR Pydantic schemas embedded in self-service responses."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict


class EmployeeBrief(BaseModel):
    """Minimal profile shown at the top of the employee dashboard."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_code: str
    first_name: str
    last_name: str
    full_name: str
    email: Optional[str] = None
    designation: Optional[str] = None
    department: str
    date_of_joining: date
    branch_id: uuid.UUID
    manager_id: Optional[uuid.UUID] = None


class BranchBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    code: str
    name: str
    city: Optional[str] = None


class EmployeeSummary(BaseModel):
    """Reference to another employee (manager, direct report)."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_code: str
    full_name: str
    designation: Optional[str] = None


class EmployeeProfile(EmployeeBrief):
    """Read-only self-service profile with reporting lines."""

    is_active: bool
    branch: BranchBrief
    manager: Optional[EmployeeSummary] = None
    direct_reports: list[EmployeeSummary] = []
