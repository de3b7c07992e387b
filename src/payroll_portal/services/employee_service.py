"""Employee registry operations."""

from __future__ import annotations

import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_portal.calculators import PayrollCalculator
from payroll_portal.errors import HasDependents, NotFound, StoreIntegrityError, ValidationFailure
from payroll_portal.models import Employee, Payroll
from payroll_portal.store import RecordStore

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "An employee with this email already exists."
HAS_PAYROLLS_MESSAGE = (
    "This employee has payrolls associated with them. Delete the payrolls first."
)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class EmployeeService:
    """Create, list and delete employees.

    Operations:
    - create_employee: reject duplicate emails before writing
    - delete_employee: refuse while any payroll references the employee
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.employees = RecordStore(session, Employee)
        self.payrolls = RecordStore(session, Payroll)

    async def email_in_use(self, email: str) -> bool:
        """Case-insensitive check against existing employees."""
        count = await self.employees.count_where(
            func.lower(Employee.email) == normalize_email(email)
        )
        return count > 0

    async def create_employee(
        self,
        name: str,
        position: str,
        department: str,
        email: str,
        salary: Decimal,
        user_id: UUID | None = None,
    ) -> Employee:
        """Add an employee. No login is linked unless user_id is given."""
        if salary < 0:
            raise ValidationFailure("Salary cannot be negative.")
        PayrollCalculator.check_range(salary, "salary")
        if await self.email_in_use(email):
            logger.warning("Rejected employee with duplicate email %s", normalize_email(email))
            raise ValidationFailure(DUPLICATE_EMAIL_MESSAGE)

        employee = Employee(
            name=name,
            position=position,
            department=department,
            email=normalize_email(email),
            salary=salary,
            user_id=user_id,
        )
        try:
            await self.employees.insert(employee)
        except StoreIntegrityError as exc:
            # Lost a race with a concurrent insert of the same email
            raise ValidationFailure(DUPLICATE_EMAIL_MESSAGE) from exc

        logger.info("Created employee %s (%s)", employee.id, employee.email)
        return employee

    async def get_employee(self, employee_id: UUID) -> Employee:
        employee = await self.employees.get(employee_id)
        if employee is None:
            raise NotFound("Employee not found")
        return employee

    async def get_employee_for_user(self, user_id: UUID) -> Employee | None:
        """Employee record owned by the given login, if any."""
        return await self.employees.first_where(Employee.user_id == user_id)

    async def list_employees(self) -> list[Employee]:
        return await self.employees.list_where(order_by=[Employee.name])

    async def count_payrolls(self, employee_id: UUID) -> int:
        return await self.payrolls.count_where(Payroll.employee_id == employee_id)

    async def delete_employee(self, employee_id: UUID) -> None:
        """Delete an employee that has no payrolls.

        The dependent count and the delete share the session's transaction.
        A payroll inserted between the two is caught by the RESTRICT foreign
        key and reported the same way as a non-zero count.
        """
        await self.get_employee(employee_id)

        dependents = await self.count_payrolls(employee_id)
        if dependents > 0:
            logger.warning(
                "Refused to delete employee %s: %d payroll(s) reference it",
                employee_id,
                dependents,
            )
            raise HasDependents(HAS_PAYROLLS_MESSAGE, dependents=dependents)

        try:
            deleted = await self.employees.delete(employee_id)
        except StoreIntegrityError as exc:
            logger.warning("Employee %s gained a payroll before delete", employee_id)
            raise HasDependents(HAS_PAYROLLS_MESSAGE) from exc

        if not deleted:
            raise NotFound("Employee not found")
        logger.info("Deleted employee %s", employee_id)
