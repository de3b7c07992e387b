"""Health check endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError

from payroll_portal import __version__
from payroll_portal.api.dependencies import DbSession
from payroll_portal.models import Employee, Payroll, User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

# Tables the portal cannot serve requests without
REQUIRED_TABLES = (User, Employee, Payroll)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: datetime
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check(db: DbSession) -> HealthResponse:
    """Report API version and whether the record store answers."""
    try:
        await db.execute(text("SELECT 1"))
        database = "healthy"
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        database = "unhealthy"

    return HealthResponse(
        status="healthy" if database == "healthy" else "degraded",
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        database=database,
    )


@router.get("/ready")
async def readiness_check(db: DbSession, response: Response) -> dict[str, str]:
    """Ready once the identity, employee and payroll tables are queryable."""
    for model in REQUIRED_TABLES:
        try:
            await db.execute(select(model.id).limit(1))
        except SQLAlchemyError:
            logger.warning("Not ready: table %s unavailable", model.__tablename__)
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            return {"status": "not_ready", "missing": model.__tablename__}
    return {"status": "ready"}


@router.get("/live")
async def liveness_check() -> dict[str, str]:
    """Liveness check for container orchestration."""
    return {"status": "alive"}
