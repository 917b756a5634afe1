"""Tenancy dependencies: the process-wide tenant manager and resolver."""

from __future__ import annotations

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator

from iam.application.services import OrganizationResolver
from iam.infrastructure.organization_repository import OrganizationRepository
from infrastructure.database.dependencies import get_read_sessionmaker
from infrastructure.settings import get_tenancy_settings
from shared_kernel.tenancy import get_tenant_manager

__all__ = ["get_organization_resolver", "get_tenant_manager"]


@asynccontextmanager
async def _organization_repository_scope() -> AsyncIterator[OrganizationRepository]:
    """Open a read session for one resolver lookup.

    The resolver runs in middleware, before any request-scoped session
    exists, so it owns its sessions.
    """
    async with get_read_sessionmaker()() as session:
        yield OrganizationRepository(session=session)


@lru_cache
def get_organization_resolver() -> OrganizationResolver:
    """Get the OrganizationResolver (singleton).

    One instance per process so its lookup cache is shared by every
    request.
    """
    settings = get_tenancy_settings()
    return OrganizationResolver(
        repository_scope=_organization_repository_scope,
        tenant_manager=get_tenant_manager(),
        cache_ttl_seconds=settings.cache_ttl_seconds,
        cache_max_entries=settings.cache_max_entries,
    )
