"""IStatsRepository backed by the IAM repositories.

Counts are delegated to the IAM repositories so the dashboard applies the
same tenant scope and soft-delete rules as every other read.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.ports import IStatsRepository
from iam.infrastructure.organization_repository import OrganizationRepository
from iam.infrastructure.role_repository import RoleRepository
from iam.infrastructure.user_repository import UserRepository
from shared_kernel.tenancy import TenantManager


class StatsRepository(IStatsRepository):
    """Count queries for the dashboard overview."""

    def __init__(self, session: AsyncSession, tenant_manager: TenantManager) -> None:
        self._organizations = OrganizationRepository(session=session)
        self._users = UserRepository(session=session, tenant_manager=tenant_manager)
        self._roles = RoleRepository(session=session, tenant_manager=tenant_manager)

    async def count_organizations(self) -> int:
        return await self._organizations.count()

    async def count_users(self, scoped: bool = True) -> int:
        return await self._users.count(scoped=scoped)

    async def count_roles(self, scoped: bool = True) -> int:
        return await self._roles.count(scoped=scoped)
