"""Repository protocols (ports) for the dashboard bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IStatsRepository(Protocol):
    """Read-only counts shown on the dashboard."""

    async def count_organizations(self) -> int:
        """Count all organizations. Never tenant-scoped."""
        ...

    async def count_users(self, scoped: bool = True) -> int:
        """Count users, within the current tenant unless ``scoped=False``."""
        ...

    async def count_roles(self, scoped: bool = True) -> int:
        """Count roles, within the current tenant unless ``scoped=False``."""
        ...
