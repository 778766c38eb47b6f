"""Core HR module — Branch and Employee models plus shared lookups."""

from employee_portal.core_hr.models import Branch, Employee

__all__ = ["Branch", "Employee"]
