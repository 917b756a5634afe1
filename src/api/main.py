"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.middleware.sessions import SessionMiddleware

from dashboard.presentation import router as dashboard_router
from iam.presentation import TenantResolverMiddleware
from iam.presentation import router as iam_router
from infrastructure.database.dependencies import (
    close_database_connections,
    get_read_session,
)
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings, get_tenancy_settings
from infrastructure.version import __version__


@asynccontextmanager
async def orgadmin_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Database engine lifecycle (created lazily, disposed on shutdown)
    """
    configure_logging(debug=get_settings().debug)

    yield

    await close_database_connections()


settings = get_settings()
tenancy_settings = get_tenancy_settings()

app = FastAPI(
    title=settings.app_name,
    description="Multi-tenant organization administration",
    version=__version__,
    lifespan=orgadmin_lifespan,
)

# Middleware added last runs first: the session must be loaded before the
# tenant resolver reads the switched tenant from it.
app.add_middleware(
    TenantResolverMiddleware,
    central_domains=tenancy_settings.central_domains,
    excluded_paths=tenancy_settings.excluded_paths,
)
app.add_middleware(
    SessionMiddleware,
    secret_key=tenancy_settings.session_secret.get_secret_value(),
)

app.include_router(iam_router)
app.include_router(dashboard_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db(
    session: Annotated[AsyncSession, Depends(get_read_session)],
) -> dict:
    """Check database connection health."""
    try:
        await session.execute(text("SELECT 1"))
        return {"status": "ok", "connected": True}
    except SQLAlchemyError as e:
        return {
            "status": "error",
            "connected": False,
            "error": str(e),
        }
