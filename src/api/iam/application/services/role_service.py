"""Role application service for IAM bounded context."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultRoleServiceProbe, RoleServiceProbe
from iam.domain.aggregates import Role
from iam.domain.value_objects import RoleId
from iam.ports.exceptions import (
    CrossTenantAccessError,
    DuplicateRoleSlugError,
    MissingTenantError,
    RoleNotFoundError,
)
from iam.ports.repositories import IRoleRepository


class RoleService:
    """Application service for role management (tenant-owned)."""

    def __init__(
        self,
        role_repository: IRoleRepository,
        session: AsyncSession,
        probe: RoleServiceProbe | None = None,
    ):
        self._role_repository = role_repository
        self._probe = probe or DefaultRoleServiceProbe()
        self._session = session

    async def create_role(
        self,
        name: str,
        slug: str,
        description: str | None = None,
        organization_id: int | None = None,
    ) -> Role:
        """Create a role in the given organization or the current tenant.

        Raises:
            InvalidSlugError: If the slug is invalid
            MissingTenantError: If no organization is given and none is bound
            CrossTenantAccessError: If the organization is not the bound tenant
            DuplicateRoleSlugError: If the slug exists in the organization
        """
        role = Role.create(
            name=name,
            slug=slug,
            description=description,
            organization_id=organization_id,
        )
        try:
            async with self._session.begin():
                saved = await self._role_repository.save(role)
        except (
            MissingTenantError,
            CrossTenantAccessError,
            DuplicateRoleSlugError,
        ) as e:
            self._probe.role_creation_failed(slug=slug, error=str(e))
            raise

        self._probe.role_created(saved.id.value, saved.slug.value, saved.organization_id)
        return saved

    async def list_roles(self, organization_id: int | None = None) -> list[Role]:
        roles = await self._role_repository.list_all(organization_id=organization_id)
        self._probe.roles_listed(len(roles), organization_id)
        return roles

    async def update_role(
        self,
        role_id: RoleId,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
    ) -> Role:
        """Apply a partial update to a role of the current tenant.

        Raises:
            RoleNotFoundError: If the role does not exist
            InvalidSlugError: If the new slug is invalid
            DuplicateRoleSlugError: If the new slug exists in the organization
        """
        async with self._session.begin():
            role = await self._role_repository.get_by_id(role_id)
            if role is None:
                self._probe.role_not_found(role_id.value)
                raise RoleNotFoundError(f"Role {role_id} not found")
            saved = await self._role_repository.save(
                role.update(name=name, slug=slug, description=description)
            )

        self._probe.role_updated(role_id.value)
        return saved

    async def delete_role(self, role_id: RoleId) -> bool:
        """Soft-delete a role of the current tenant.

        Returns:
            True if deleted, False if it did not exist
        """
        async with self._session.begin():
            role = await self._role_repository.get_by_id(role_id)
            if role is None:
                self._probe.role_not_found(role_id.value)
                return False
            deleted = await self._role_repository.delete(role)

        if deleted:
            self._probe.role_deleted(role_id.value)
        return deleted
