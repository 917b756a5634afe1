"""Organization application service for IAM bounded context.

Handles organization management operations (create, read, list, update,
delete). Organizations are the tenants, so none of these operations are
tenant-scoped.
"""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultOrganizationServiceProbe,
    OrganizationServiceProbe,
)
from iam.application.services.organization_resolver import OrganizationResolver
from iam.domain.aggregates import Organization
from iam.ports.exceptions import (
    DuplicateOrganizationSlugError,
    OrganizationNotFoundError,
)
from iam.ports.repositories import IOrganizationRepository


class OrganizationService:
    """Application service for organization management.

    Owns the transaction of each use case and keeps the resolver cache
    consistent with what was written.
    """

    def __init__(
        self,
        organization_repository: IOrganizationRepository,
        resolver: OrganizationResolver,
        session: AsyncSession,
        probe: OrganizationServiceProbe | None = None,
    ):
        """Initialize OrganizationService with dependencies.

        Args:
            organization_repository: Repository for organization persistence
            resolver: Tenant resolver whose cache is cleared on writes
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._organization_repository = organization_repository
        self._resolver = resolver
        self._session = session
        self._probe = probe or DefaultOrganizationServiceProbe()

    async def create_organization(
        self,
        name: str,
        slug: str,
        description: str | None = None,
        is_active: bool = True,
    ) -> Organization:
        """Create a new organization.

        Raises:
            InvalidSlugError: If the slug is not a valid subdomain label
            DuplicateOrganizationSlugError: If the slug is already taken
        """
        organization = Organization.create(
            name=name, slug=slug, description=description, is_active=is_active
        )
        async with self._session.begin():
            try:
                await self._organization_repository.save(organization)
            except DuplicateOrganizationSlugError:
                self._probe.duplicate_organization_slug(slug)
                raise

        # A miss for this slug may have been cached before it existed
        self._resolver.clear_cache(organization)
        self._probe.organization_created(organization.id, slug)
        return organization

    async def get_organization(self, organization_id: int) -> Organization | None:
        organization = await self._organization_repository.get_by_id(organization_id)
        if organization is None:
            self._probe.organization_not_found(organization_id)
        return organization

    async def list_organizations(
        self, search: str | None = None, is_active: bool | None = None
    ) -> list[Organization]:
        organizations = await self._organization_repository.list_all(
            search=search, is_active=is_active
        )
        self._probe.organizations_listed(len(organizations))
        return organizations

    async def update_organization(
        self,
        organization_id: int,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> Organization:
        """Apply a partial update.

        Cached lookups under both the old and the new slug are cleared.

        Raises:
            OrganizationNotFoundError: If the organization does not exist
            InvalidSlugError: If the new slug is invalid
            DuplicateOrganizationSlugError: If the new slug is taken
        """
        async with self._session.begin():
            organization = await self._organization_repository.get_by_id(
                organization_id
            )
            if organization is None:
                self._probe.organization_not_found(organization_id)
                raise OrganizationNotFoundError(
                    f"Organization {organization_id} not found"
                )

            before = replace(organization)
            organization.update(
                name=name, slug=slug, description=description, is_active=is_active
            )
            try:
                await self._organization_repository.save(organization)
            except DuplicateOrganizationSlugError:
                self._probe.duplicate_organization_slug(organization.slug.value)
                raise

        self._resolver.clear_cache(before)
        self._resolver.clear_cache(organization)
        self._probe.organization_updated(organization_id)
        return organization

    async def delete_organization(self, organization_id: int) -> bool:
        """Delete an organization.

        Returns:
            True if deleted, False if it did not exist

        Raises:
            OrganizationInUseError: If users or roles still belong to it
        """
        async with self._session.begin():
            organization = await self._organization_repository.get_by_id(
                organization_id
            )
            if organization is None:
                self._probe.organization_not_found(organization_id)
                return False

            deleted = await self._organization_repository.delete(organization)

        if deleted:
            self._resolver.clear_cache(organization)
            self._probe.organization_deleted(organization_id)
        return deleted
