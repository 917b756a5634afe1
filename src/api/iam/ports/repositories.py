"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Tenant-owned repositories (users, roles) scope every query to
the current tenant unless told otherwise.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import Organization, Role, User
from iam.domain.value_objects import RoleId, UserId


@runtime_checkable
class IOrganizationRepository(Protocol):
    """Repository for Organization aggregate persistence.

    Organizations are the tenants themselves and are never tenant-scoped.
    """

    async def save(self, organization: Organization) -> Organization:
        """Persist an organization aggregate.

        Creates a new organization or updates an existing one. New
        organizations get their database id assigned.

        Args:
            organization: The Organization aggregate to persist

        Returns:
            The persisted aggregate with ``id`` populated

        Raises:
            DuplicateOrganizationSlugError: If the slug is already taken
        """
        ...

    async def get_by_id(
        self, organization_id: int, active_only: bool = False
    ) -> Organization | None:
        """Retrieve an organization by its id.

        Args:
            organization_id: The database id
            active_only: Only return the organization if it is active

        Returns:
            The Organization aggregate, or None if not found
        """
        ...

    async def get_by_slug(
        self, slug: str, active_only: bool = False
    ) -> Organization | None:
        """Retrieve an organization by slug.

        Args:
            slug: The organization slug (subdomain)
            active_only: Only return the organization if it is active

        Returns:
            The Organization aggregate, or None if not found
        """
        ...

    async def list_all(
        self, search: str | None = None, is_active: bool | None = None
    ) -> list[Organization]:
        """List organizations.

        Args:
            search: Case-insensitive term matched against name and description
            is_active: Filter on the active flag when given

        Returns:
            Matching organizations ordered by name
        """
        ...

    async def count(self) -> int:
        """Count organizations that are not soft-deleted."""
        ...

    async def delete(self, organization: Organization) -> bool:
        """Soft-delete an organization.

        Soft-deleted organizations are hidden from every read, so they can
        no longer be resolved as a tenant. Their slug stays taken.

        Returns:
            True if deleted, False if not found

        Raises:
            OrganizationInUseError: If users or roles still belong to it
        """
        ...


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate persistence (tenant-owned).

    Soft-deleted users are hidden from every read.
    """

    async def save(self, user: User) -> User:
        """Persist a user.

        A user without ``organization_id`` is assigned the current tenant.

        Returns:
            The persisted user with ``organization_id`` populated

        Raises:
            MissingTenantError: If no organization is given or bound
            CrossTenantAccessError: If a new user names another tenant's
                organization
            DuplicateUserEmailError: If the email already exists
        """
        ...

    async def get_by_id(self, user_id: UserId, scoped: bool = True) -> User | None:
        """Retrieve a user by id, within the current tenant unless ``scoped=False``."""
        ...

    async def list_all(
        self, organization_id: int | None = None, scoped: bool = True
    ) -> list[User]:
        """List users.

        Args:
            organization_id: Restrict to one organization. With a tenant
                bound this must be the current tenant.
            scoped: Apply the current-tenant scope. ``scoped=False`` also
                lifts the restriction on ``organization_id``.

        Raises:
            CrossTenantAccessError: If ``organization_id`` names another
                tenant while one is bound
        """
        ...

    async def count(self, scoped: bool = True) -> int:
        """Count users, within the current tenant unless ``scoped=False``."""
        ...

    async def delete(self, user: User) -> bool:
        """Soft-delete a user of the current tenant.

        Returns:
            True if deleted, False if not found
        """
        ...

    async def assign_role(self, user: User, role: Role) -> User:
        """Give a user a role of the same organization (no-op if held).

        Raises:
            UserNotFoundError: If the user is not visible
            RoleNotFoundError: If the role is not visible
            CrossTenantAccessError: If the role belongs to another organization
        """
        ...

    async def remove_role(self, user: User, role: Role) -> User:
        """Take a role away from a user (no-op if not held).

        Raises:
            UserNotFoundError: If the user is not visible
        """
        ...


@runtime_checkable
class IRoleRepository(Protocol):
    """Repository for Role aggregate persistence (tenant-owned).

    Soft-deleted roles are hidden from every read.
    """

    async def save(self, role: Role) -> Role:
        """Persist a role.

        A role without ``organization_id`` is assigned the current tenant.

        Raises:
            MissingTenantError: If no organization is given or bound
            CrossTenantAccessError: If a new role names another tenant's
                organization
            DuplicateRoleSlugError: If the slug exists in the organization
        """
        ...

    async def get_by_id(self, role_id: RoleId, scoped: bool = True) -> Role | None:
        """Retrieve a role by id, within the current tenant unless ``scoped=False``."""
        ...

    async def list_all(
        self, organization_id: int | None = None, scoped: bool = True
    ) -> list[Role]:
        """List roles, with the same scoping rules as ``IUserRepository.list_all``."""
        ...

    async def count(self, scoped: bool = True) -> int:
        """Count roles, within the current tenant unless ``scoped=False``."""
        ...

    async def delete(self, role: Role) -> bool:
        """Soft-delete a role of the current tenant.

        Users holding it stop reporting it.

        Returns:
            True if deleted, False if not found
        """
        ...
