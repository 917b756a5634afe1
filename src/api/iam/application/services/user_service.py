"""User application service for IAM bounded context.

Users are tenant-owned: listing is scoped to the current tenant and new
users join it unless an organization is given explicitly.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultUserServiceProbe, UserServiceProbe
from iam.domain.aggregates import User
from iam.domain.value_objects import RoleId, UserId
from iam.ports.exceptions import (
    CrossTenantAccessError,
    DuplicateUserEmailError,
    MissingTenantError,
    RoleNotFoundError,
    UserNotFoundError,
)
from iam.ports.repositories import IRoleRepository, IUserRepository


class UserService:
    """Application service for user management."""

    def __init__(
        self,
        user_repository: IUserRepository,
        role_repository: IRoleRepository,
        session: AsyncSession,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            user_repository: Repository for user persistence
            role_repository: Repository used to look up roles being assigned
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._role_repository = role_repository
        self._probe = probe or DefaultUserServiceProbe()
        self._session = session

    async def create_user(
        self, name: str, email: str, organization_id: int | None = None
    ) -> User:
        """Create a user in the given organization or the current tenant.

        Raises:
            MissingTenantError: If no organization is given and none is bound
            CrossTenantAccessError: If the organization is not the bound tenant
            DuplicateUserEmailError: If the email is already registered
        """
        user = User.create(name=name, email=email, organization_id=organization_id)
        try:
            async with self._session.begin():
                saved = await self._user_repository.save(user)
        except (
            MissingTenantError,
            CrossTenantAccessError,
            DuplicateUserEmailError,
        ) as e:
            self._probe.user_creation_failed(email=user.email, error=str(e))
            raise

        self._probe.user_created(saved.id.value, saved.organization_id)
        return saved

    async def list_users(self, organization_id: int | None = None) -> list[User]:
        """List users of one organization, or of the current tenant.

        Raises:
            CrossTenantAccessError: If the organization is not the bound tenant
        """
        users = await self._user_repository.list_all(organization_id=organization_id)
        self._probe.users_listed(len(users), organization_id)
        return users

    async def get_user(self, user_id: UserId) -> User | None:
        return await self._user_repository.get_by_id(user_id)

    async def update_user(
        self, user_id: UserId, name: str | None = None, email: str | None = None
    ) -> User:
        """Apply a partial update to a user of the current tenant.

        Raises:
            UserNotFoundError: If the user does not exist
            DuplicateUserEmailError: If the new email is taken
        """
        async with self._session.begin():
            user = await self._require_user(user_id)
            saved = await self._user_repository.save(
                user.update(name=name, email=email)
            )

        self._probe.user_updated(user_id.value)
        return saved

    async def delete_user(self, user_id: UserId) -> bool:
        """Soft-delete a user of the current tenant.

        Returns:
            True if deleted, False if it did not exist
        """
        async with self._session.begin():
            user = await self._user_repository.get_by_id(user_id)
            if user is None:
                self._probe.user_not_found(user_id.value)
                return False
            deleted = await self._user_repository.delete(user)

        if deleted:
            self._probe.user_deleted(user_id.value)
        return deleted

    async def assign_role(self, user_id: UserId, role_id: RoleId) -> User:
        """Give a user a role of its own organization.

        Raises:
            UserNotFoundError: If the user does not exist
            RoleNotFoundError: If the role does not exist
            CrossTenantAccessError: If the role belongs to another organization
        """
        async with self._session.begin():
            user = await self._require_user(user_id)
            role = await self._role_repository.get_by_id(role_id)
            if role is None:
                raise RoleNotFoundError(f"Role {role_id} not found")
            return await self._user_repository.assign_role(user, role)

    async def remove_role(self, user_id: UserId, role_id: RoleId) -> User:
        """Take a role away from a user.

        Raises:
            UserNotFoundError: If the user does not exist
            RoleNotFoundError: If the role does not exist
        """
        async with self._session.begin():
            user = await self._require_user(user_id)
            role = await self._role_repository.get_by_id(role_id)
            if role is None:
                raise RoleNotFoundError(f"Role {role_id} not found")
            return await self._user_repository.remove_role(user, role)

    async def _require_user(self, user_id: UserId) -> User:
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            self._probe.user_not_found(user_id.value)
            raise UserNotFoundError(f"User {user_id} not found")
        return user
