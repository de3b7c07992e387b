"""Pytest fixtures for payroll portal tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from payroll_portal.database import create_engine, create_schema, make_session_factory
from payroll_portal.models import Employee, Payroll, User, UserRole
from payroll_portal.services.authorization import Identity
from payroll_portal.services.security import get_password_hash

# In-memory SQLite shared across sessions through a single connection
TEST_DATABASE_URL = "sqlite+aiosqlite://"

TEST_PASSWORD = "s3cret-pass"


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh test database for each test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return make_session_factory(engine)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def admin_user(session: AsyncSession) -> User:
    """An admin login."""
    user = User(
        name="Ada Admin",
        email="ada@example.com",
        password_hash=get_password_hash(TEST_PASSWORD),
        role=UserRole.ADMIN.value,
    )
    session.add(user)
    await session.flush()
    return user


@pytest_asyncio.fixture
async def employee_user(session: AsyncSession) -> User:
    """An employee login."""
    user = User(
        name="Eve Employee",
        email="eve@example.com",
        password_hash=get_password_hash(TEST_PASSWORD),
        role=UserRole.EMPLOYEE.value,
    )
    session.add(user)
    await session.flush()
    return user


@pytest_asyncio.fixture
async def employee(session: AsyncSession, employee_user: User) -> Employee:
    """An employee record owned by employee_user."""
    record = Employee(
        user_id=employee_user.id,
        name="Eve Employee",
        position="Software Developer",
        department="Engineering",
        email="eve@example.com",
        salary=Decimal("5000.00"),
    )
    session.add(record)
    await session.flush()
    return record


@pytest_asyncio.fixture
async def unlinked_employee(session: AsyncSession) -> Employee:
    """An employee record without a login."""
    record = Employee(
        name="Sam Contractor",
        position="Designer",
        department="Marketing",
        email="sam@example.com",
        salary=Decimal("4200.00"),
    )
    session.add(record)
    await session.flush()
    return record


@pytest_asyncio.fixture
async def payroll(session: AsyncSession, employee: Employee) -> Payroll:
    """A payroll for the linked employee."""
    record = Payroll(
        employee_id=employee.id,
        employee_name=employee.name,
        pay_period="May 2024",
        pay_date=date(2024, 5, 31),
        basic_salary=Decimal("5000.00"),
        overtime=Decimal("200.00"),
        bonus=Decimal("100.00"),
        tax=Decimal("300.00"),
        insurance=Decimal("150.00"),
        other_deductions=Decimal("50.00"),
        gross_salary=Decimal("5300.00"),
        total_deductions=Decimal("500.00"),
        net_salary=Decimal("4800.00"),
    )
    session.add(record)
    await session.flush()
    return record


@pytest.fixture
def admin_identity(admin_user: User) -> Identity:
    return Identity.from_user(admin_user)


@pytest.fixture
def employee_identity(employee_user: User) -> Identity:
    return Identity.from_user(employee_user)
