"""Dependency injection for the dashboard bounded context."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.application import StatsOverviewService
from dashboard.infrastructure.stats_repository import StatsRepository
from infrastructure.database.dependencies import get_read_session
from shared_kernel.tenancy import TenantManager, get_tenant_manager


def get_stats_repository(
    session: Annotated[AsyncSession, Depends(get_read_session)],
    tenant_manager: Annotated[TenantManager, Depends(get_tenant_manager)],
) -> StatsRepository:
    """Get StatsRepository instance on a read session."""
    return StatsRepository(session=session, tenant_manager=tenant_manager)


def get_stats_overview_service(
    stats_repo: Annotated[StatsRepository, Depends(get_stats_repository)],
    tenant_manager: Annotated[TenantManager, Depends(get_tenant_manager)],
) -> StatsOverviewService:
    """Get StatsOverviewService instance."""
    return StatsOverviewService(
        stats_repository=stats_repo, tenant_manager=tenant_manager
    )
