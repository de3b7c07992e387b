"""ORM models."""

from payroll_portal.models.base import Base, TimestampMixin
from payroll_portal.models.employee import Employee
from payroll_portal.models.payroll import Payroll
from payroll_portal.models.user import User, UserRole

__all__ = [
    "Base",
    "TimestampMixin",
    "Employee",
    "Payroll",
    "User",
    "UserRole",
]
