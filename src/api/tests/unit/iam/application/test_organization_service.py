"""Unit tests for OrganizationService."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, Mock

import pytest

from iam.application.observability import OrganizationServiceProbe
from iam.application.services import OrganizationResolver, OrganizationService
from iam.domain.aggregates import Organization
from iam.domain.exceptions import InvalidSlugError
from iam.ports.exceptions import (
    DuplicateOrganizationSlugError,
    OrganizationNotFoundError,
)
from iam.ports.repositories import IOrganizationRepository


@pytest.fixture
def mock_session():
    """Mock AsyncSession whose begin() works as an async context manager."""
    session = MagicMock()
    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=None)
    transaction.__aexit__ = AsyncMock(return_value=False)
    session.begin.return_value = transaction
    return session


@pytest.fixture
def mock_repository() -> AsyncMock:
    return AsyncMock(spec=IOrganizationRepository)


@pytest.fixture
def mock_resolver() -> Mock:
    return Mock(spec=OrganizationResolver)


@pytest.fixture
def mock_probe() -> Mock:
    return Mock(spec=OrganizationServiceProbe)


@pytest.fixture
def service(mock_repository, mock_resolver, mock_session, mock_probe):
    return OrganizationService(
        organization_repository=mock_repository,
        resolver=mock_resolver,
        session=mock_session,
        probe=mock_probe,
    )


def _saved(organization: Organization) -> Organization:
    organization.id = 10
    return organization


def _existing() -> Organization:
    organization = Organization.create(name="Acme", slug="acme")
    organization.id = 10
    return organization


class TestCreateOrganization:
    @pytest.mark.asyncio
    async def test_creates_and_clears_cached_miss(
        self, service, mock_repository, mock_resolver, mock_probe
    ):
        mock_repository.save.side_effect = _saved

        organization = await service.create_organization(name="Acme", slug="acme")

        assert organization.id == 10
        assert organization.slug.value == "acme"
        mock_resolver.clear_cache.assert_called_once_with(organization)
        mock_probe.organization_created.assert_called_once_with(10, "acme")

    @pytest.mark.asyncio
    async def test_duplicate_slug_propagates(
        self, service, mock_repository, mock_probe
    ):
        mock_repository.save.side_effect = DuplicateOrganizationSlugError("taken")

        with pytest.raises(DuplicateOrganizationSlugError):
            await service.create_organization(name="Acme", slug="acme")

        mock_probe.duplicate_organization_slug.assert_called_once_with("acme")

    @pytest.mark.asyncio
    async def test_invalid_slug_is_rejected_before_saving(
        self, service, mock_repository
    ):
        with pytest.raises(InvalidSlugError):
            await service.create_organization(name="Acme", slug="Not A Slug")

        mock_repository.save.assert_not_awaited()


class TestUpdateOrganization:
    @pytest.mark.asyncio
    async def test_clears_cache_for_old_and_new_slug(
        self, service, mock_repository, mock_resolver
    ):
        mock_repository.get_by_id.return_value = _existing()
        mock_repository.save.side_effect = lambda o: o

        updated = await service.update_organization(10, slug="acme-corp")

        assert updated.slug.value == "acme-corp"
        cleared = [c.args[0].slug.value for c in mock_resolver.clear_cache.call_args_list]
        assert cleared == ["acme", "acme-corp"]

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, service, mock_repository):
        mock_repository.get_by_id.return_value = _existing()
        mock_repository.save.side_effect = lambda o: o

        updated = await service.update_organization(10, is_active=False)

        assert updated.is_active is False
        assert updated.name == "Acme"
        assert updated.slug.value == "acme"

    @pytest.mark.asyncio
    async def test_missing_organization_raises(self, service, mock_repository):
        mock_repository.get_by_id.return_value = None

        with pytest.raises(OrganizationNotFoundError):
            await service.update_organization(99, name="X")


class TestDeleteOrganization:
    @pytest.mark.asyncio
    async def test_deletes_and_clears_cache(
        self, service, mock_repository, mock_resolver
    ):
        organization = _existing()
        mock_repository.get_by_id.return_value = organization
        mock_repository.delete.return_value = True

        assert await service.delete_organization(10) is True
        mock_resolver.clear_cache.assert_called_once_with(organization)

    @pytest.mark.asyncio
    async def test_missing_organization_returns_false(
        self, service, mock_repository, mock_resolver
    ):
        mock_repository.get_by_id.return_value = None

        assert await service.delete_organization(99) is False
        mock_repository.delete.assert_not_awaited()
        mock_resolver.clear_cache.assert_not_called()


class TestListOrganizations:
    @pytest.mark.asyncio
    async def test_passes_filters(self, service, mock_repository, mock_probe):
        mock_repository.list_all.return_value = [_existing()]

        result = await service.list_organizations(search="ac", is_active=True)

        assert len(result) == 1
        mock_repository.list_all.assert_awaited_once_with(search="ac", is_active=True)
        mock_probe.organizations_listed.assert_called_once_with(1)
