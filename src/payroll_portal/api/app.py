"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from payroll_portal import __version__
from payroll_portal.api.routes import (
    auth_router,
    employees_router,
    health_router,
    payrolls_router,
    payslips_router,
)
from payroll_portal.config import get_settings
from payroll_portal.database import create_schema, dispose_db, init_db
from payroll_portal.errors import (
    AuthenticationRequired,
    HasDependents,
    NotFound,
    PayrollPortalError,
    StoreFailure,
    Unauthorized,
    ValidationFailure,
)
from payroll_portal.logging_config import configure_logging

logger = logging.getLogger(__name__)

# Most specific first; lookup walks the exception's MRO
ERROR_STATUS: dict[type[PayrollPortalError], int] = {
    ValidationFailure: status.HTTP_400_BAD_REQUEST,
    HasDependents: status.HTTP_409_CONFLICT,
    AuthenticationRequired: status.HTTP_401_UNAUTHORIZED,
    NotFound: status.HTTP_404_NOT_FOUND,
    Unauthorized: status.HTTP_403_FORBIDDEN,
    StoreFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(exc: PayrollPortalError) -> int:
    """HTTP status for a portal error."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return status.HTTP_400_BAD_REQUEST


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    engine, _ = init_db()
    await create_schema(engine)
    logger.info("Payroll portal %s started", __version__)
    yield
    # Shutdown
    await dispose_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)
    if settings.uses_dev_secret:
        logger.warning("SECRET_KEY is not set; signing tokens with the development key")

    app = FastAPI(
        title="Payroll Portal API",
        description="Employee registry, payroll generation and payslips",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(PayrollPortalError)
    async def portal_error_handler(
        request: Request, exc: PayrollPortalError
    ) -> JSONResponse:
        """Map typed action failures to short JSON errors."""
        content = {"detail": exc.message, "code": exc.code}
        if exc.context:
            content["context"] = exc.context
        status_code = status_for(exc)
        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(status_code=status_code, content=content, headers=headers)

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(employees_router, prefix="/api/v1")
    app.include_router(payrolls_router, prefix="/api/v1")
    app.include_router(payslips_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
