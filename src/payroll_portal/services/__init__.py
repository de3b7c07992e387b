"""Payroll portal services."""

from payroll_portal.services.authorization import (
    Identity,
    InvalidTransitionError,
    PayslipAccess,
    PayslipAccessStateMachine,
    PayslipAuthorizer,
)
from payroll_portal.services.employee_service import EmployeeService
from payroll_portal.services.identity_service import IdentityService
from payroll_portal.services.payroll_service import PayrollService, PayslipView

__all__ = [
    "Identity",
    "InvalidTransitionError",
    "PayslipAccess",
    "PayslipAccessStateMachine",
    "PayslipAuthorizer",
    "EmployeeService",
    "IdentityService",
    "PayrollService",
    "PayslipView",
]
