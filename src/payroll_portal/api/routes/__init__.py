"""API routes."""

from payroll_portal.api.routes.auth import router as auth_router
from payroll_portal.api.routes.employees import router as employees_router
from payroll_portal.api.routes.health import router as health_router
from payroll_portal.api.routes.payrolls import router as payrolls_router
from payroll_portal.api.routes.payslips import router as payslips_router

__all__ = [
    "auth_router",
    "employees_router",
    "health_router",
    "payrolls_router",
    "payslips_router",
]
