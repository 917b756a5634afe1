"""Dashboard application services."""

from __future__ import annotations

from dashboard.application.observability import (
    DefaultStatsServiceProbe,
    StatsServiceProbe,
)
from dashboard.domain import StatCard, StatColor
from dashboard.ports import IStatsRepository
from shared_kernel.tenancy import TenantManager


class StatsOverviewService:
    """Builds the three count cards of the dashboard overview.

    Organizations are always counted across the whole system; users and
    roles are counted within the current tenant when one is bound.
    """

    def __init__(
        self,
        stats_repository: IStatsRepository,
        tenant_manager: TenantManager,
        probe: StatsServiceProbe | None = None,
    ):
        self._stats = stats_repository
        self._tenant_manager = tenant_manager
        self._probe = probe or DefaultStatsServiceProbe()

    async def get_stats(self) -> list[StatCard]:
        organizations = await self._stats.count_organizations()
        users = await self._stats.count_users()
        roles = await self._stats.count_roles()

        self._probe.stats_computed(
            self._tenant_manager.get_current_tenant_id(),
            organizations=organizations,
            users=users,
            roles=roles,
        )

        return [
            StatCard(
                label="Total Organizations",
                value=organizations,
                description="Active organizations in the system",
                icon="heroicon-o-building-office",
                color=StatColor.SUCCESS,
            ),
            StatCard(
                label="Total Users",
                value=users,
                description="Registered users across all organizations",
                icon="heroicon-o-users",
                color=StatColor.PRIMARY,
            ),
            StatCard(
                label="Total Roles",
                value=roles,
                description="Defined roles in the system",
                icon="heroicon-o-shield-check",
                color=StatColor.WARNING,
            ),
        ]
