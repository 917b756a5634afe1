"""Integration test fixtures for IAM bounded context.

These fixtures require a running, migrated PostgreSQL instance.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import cast

import pytest
import pytest_asyncio
from sqlalchemy import CursorResult, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from iam.application.services import OrganizationResolver
from iam.domain.aggregates import Organization
from iam.infrastructure.organization_repository import OrganizationRepository
from iam.infrastructure.role_repository import RoleRepository
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.engines import create_write_engine
from infrastructure.settings import DatabaseSettings
from shared_kernel.tenancy import TenantManager
from tests.integration.iam.cleanup_probe import DefaultTestCleanupProbe

# Children before organizations (RESTRICT foreign keys)
_TABLES = ("role_user", "roles", "users", "organizations")


@pytest_asyncio.fixture
async def session_factory(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Provide a session factory for tests that need several sessions."""
    engine = create_write_engine(integration_db_settings)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def clean_iam_data(async_session: AsyncSession) -> AsyncGenerator[None, None]:
    """Empty the IAM tables before and after each test."""
    probe = DefaultTestCleanupProbe()

    async def cleanup() -> None:
        try:
            for table in _TABLES:
                result = cast(
                    CursorResult, await async_session.execute(text(f"DELETE FROM {table}"))
                )
                probe.table_cleaned(table, result.rowcount)
            await async_session.commit()
        except Exception as e:
            probe.cleanup_failed(error=str(e))
            await async_session.rollback()
            raise

    await cleanup()
    yield
    await cleanup()


@pytest.fixture
def tenant_manager() -> TenantManager:
    return TenantManager()


@pytest.fixture
def organization_repository(async_session: AsyncSession) -> OrganizationRepository:
    return OrganizationRepository(session=async_session)


@pytest.fixture
def user_repository(
    async_session: AsyncSession, tenant_manager: TenantManager
) -> UserRepository:
    return UserRepository(session=async_session, tenant_manager=tenant_manager)


@pytest.fixture
def role_repository(
    async_session: AsyncSession, tenant_manager: TenantManager
) -> RoleRepository:
    return RoleRepository(session=async_session, tenant_manager=tenant_manager)


@pytest.fixture
def resolver(
    session_factory: async_sessionmaker[AsyncSession], tenant_manager: TenantManager
) -> OrganizationResolver:
    """Resolver opening its own sessions, as in the running application."""

    @asynccontextmanager
    async def scope():
        async with session_factory() as session:
            yield OrganizationRepository(session=session)

    return OrganizationResolver(repository_scope=scope, tenant_manager=tenant_manager)


@pytest_asyncio.fixture
async def create_organization(
    async_session: AsyncSession, organization_repository: OrganizationRepository
):
    """Factory persisting an organization and returning it with its id."""

    async def _create(slug: str, is_active: bool = True) -> Organization:
        organization = Organization.create(
            name=slug.title(), slug=slug, is_active=is_active
        )
        async with async_session.begin():
            await organization_repository.save(organization)
        return organization

    return _create
