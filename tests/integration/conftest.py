"""Integration fixtures: the FastAPI app over the test database."""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from payroll_portal.api.app import create_app
from payroll_portal.api.dependencies import get_db_session

PASSWORD = "correct-horse"

RegisterUser = Callable[..., Awaitable[dict]]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = create_app()

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def password() -> str:
    return PASSWORD


@pytest.fixture
def register_user(client: AsyncClient) -> RegisterUser:
    """Register a login through the API and return its JSON body."""

    async def register(email: str, role: str = "employee", name: str = "User") -> dict:
        response = await client.post(
            "/api/v1/auth/register",
            json={
                "name": name,
                "email": email,
                "password": PASSWORD,
                "confirm_password": PASSWORD,
                "role": role,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return register


@pytest.fixture
def login(client: AsyncClient) -> Callable[[str], Awaitable[dict[str, str]]]:
    """Log in through the API and return bearer auth headers."""

    async def log_in(email: str) -> dict[str, str]:
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": email, "password": PASSWORD},
        )
        assert response.status_code == 200, response.text
        return bearer(response.json()["access_token"])

    return log_in


@pytest_asyncio.fixture
async def admin_headers(register_user: RegisterUser, login) -> dict[str, str]:
    """Auth headers of the first registered identity (always an admin)."""
    admin = await register_user("admin@example.com", name="Admin")
    assert admin["role"] == "admin"
    return await login("admin@example.com")


@pytest_asyncio.fixture
async def employee_headers(
    register_user: RegisterUser, login, admin_headers: dict[str, str]
) -> dict[str, str]:
    """Auth headers of an employee login registered after the admin."""
    user = await register_user("worker@example.com", name="Wendy Worker")
    assert user["role"] == "employee"
    return await login("worker@example.com")
