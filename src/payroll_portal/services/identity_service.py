"""Registration, login and identity lookup."""

from __future__ import annotations

import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_portal.errors import StoreIntegrityError, Unauthorized, ValidationFailure
from payroll_portal.models import Employee, User, UserRole
from payroll_portal.services.authorization import Identity
from payroll_portal.services.employee_service import EmployeeService, normalize_email
from payroll_portal.services.security import get_password_hash, verify_password
from payroll_portal.store import RecordStore

logger = logging.getLogger(__name__)

UNSET_FIELD = "Not set"


class IdentityService:
    """Manages login identities and their link to employee records."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = RecordStore(session, User)
        self.employee_service = EmployeeService(session)

    async def email_in_use(self, email: str) -> bool:
        count = await self.users.count_where(func.lower(User.email) == normalize_email(email))
        return count > 0

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: str,
        role: str = UserRole.EMPLOYEE.value,
    ) -> User:
        """Register a login.

        The very first identity becomes an admin whatever role was asked for.
        Employee identities are linked to the employee record with the same
        email, or get a fresh placeholder record.
        """
        if password != confirm_password:
            raise ValidationFailure("Passwords do not match.")
        if role not in (UserRole.ADMIN, UserRole.EMPLOYEE):
            raise ValidationFailure(f"Unknown role '{role}'.")
        if await self.email_in_use(email):
            logger.warning("Rejected registration with duplicate email %s", normalize_email(email))
            raise ValidationFailure("Email already in use.")

        existing_users = await self.users.count_where()
        if existing_users == 0:
            role = UserRole.ADMIN.value

        user = User(
            name=name,
            email=normalize_email(email),
            password_hash=get_password_hash(password),
            role=UserRole(role).value,
        )
        try:
            await self.users.insert(user)
        except StoreIntegrityError as exc:
            raise ValidationFailure("Email already in use.") from exc

        if user.role == UserRole.EMPLOYEE:
            await self._link_employee(user)

        logger.info("Registered %s identity %s", user.role, user.id)
        return user

    async def _link_employee(self, user: User) -> Employee:
        employee = await self.employee_service.employees.first_where(
            func.lower(Employee.email) == user.email
        )
        if employee is not None and employee.user_id is None:
            employee.user_id = user.id
            await self.session.flush()
            logger.info("Linked employee %s to identity %s", employee.id, user.id)
            return employee
        if employee is not None:
            # Email owned by an employee that already has a login
            return employee

        return await self.employee_service.create_employee(
            name=user.name,
            position=UNSET_FIELD,
            department=UNSET_FIELD,
            email=user.email,
            salary=Decimal("0"),
            user_id=user.id,
        )

    async def authenticate(self, email: str, password: str) -> User:
        """Check credentials; the same message for unknown email and bad password."""
        user = await self.users.first_where(func.lower(User.email) == normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login for %s", normalize_email(email))
            raise Unauthorized("Invalid email or password")
        return user

    async def get_identity(self, user_id: UUID) -> Identity | None:
        """Resolve the current identity, None when the login is unknown."""
        user = await self.users.get(user_id)
        if user is None:
            return None
        return Identity.from_user(user)
