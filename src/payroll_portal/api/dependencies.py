"""FastAPI dependencies for dependency injection."""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_portal.database import init_db
from payroll_portal.errors import AuthenticationRequired, Unauthorized
from payroll_portal.services.authorization import Identity, PayslipAuthorizer
from payroll_portal.services.identity_service import IdentityService
from payroll_portal.services.security import decode_access_token

logger = logging.getLogger(__name__)

# auto_error off so a missing token reaches require_identity as None
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    _, factory = init_db()
    async with factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def get_current_identity(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    token: Annotated[str | None, Depends(oauth2_scheme)] = None,
) -> Identity | None:
    """Resolve the logged-in identity from the bearer access token."""
    if not token:
        return None
    try:
        user_id = decode_access_token(token)
    except JWTError:
        logger.warning("Rejected invalid or expired access token")
        raise AuthenticationRequired("Could not validate credentials")

    identity = await IdentityService(db).get_identity(user_id)
    if identity is None:
        raise AuthenticationRequired("Could not validate credentials")
    return identity


async def require_identity(
    identity: Annotated[Identity | None, Depends(get_current_identity)],
) -> Identity:
    """Require a logged-in identity."""
    if identity is None:
        raise AuthenticationRequired("Login required")
    return identity


async def require_admin(
    identity: Annotated[Identity, Depends(require_identity)],
) -> Identity:
    """Require an admin identity."""
    if not PayslipAuthorizer.can_manage(identity):
        raise Unauthorized("Admin access required")
    return identity


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
CurrentIdentity = Annotated[Identity, Depends(require_identity)]
AdminIdentity = Annotated[Identity, Depends(require_admin)]
