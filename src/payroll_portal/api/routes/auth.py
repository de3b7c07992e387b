"""Registration and login endpoints."""

from fastapi import APIRouter, status

from payroll_portal.api.dependencies import CurrentIdentity, DbSession
from payroll_portal.api.schemas import (
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from payroll_portal.config import get_settings
from payroll_portal.errors import NotFound
from payroll_portal.models import User
from payroll_portal.services.identity_service import IdentityService
from payroll_portal.services.security import create_access_token

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def register(db: DbSession, payload: RegisterRequest) -> UserResponse:
    """Register a login. The first one ever registered becomes an admin."""
    user = await IdentityService(db).register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        confirm_password=payload.confirm_password,
        role=payload.role,
    )
    await db.commit()
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={403: {"model": ErrorResponse}},
)
async def login(db: DbSession, payload: LoginRequest) -> TokenResponse:
    """Check credentials and issue a bearer access token."""
    user = await IdentityService(db).authenticate(payload.email, payload.password)
    expires_in = get_settings().access_token_expire_minutes * 60
    return TokenResponse(
        access_token=create_access_token(user.id),
        expires_in=expires_in,
        user=UserResponse.model_validate(user),
    )


@router.get(
    "/me",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse}},
)
async def me(db: DbSession, identity: CurrentIdentity) -> UserResponse:
    """Return the current identity."""
    user = await db.get(User, identity.id)
    if user is None:
        raise NotFound("User not found")
    return UserResponse.model_validate(user)
