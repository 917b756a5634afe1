"""PostgreSQL implementation of IUserRepository.

Users are tenant-owned: reads are scoped to the tenant bound in the current
unit of work and new users inherit it when no organization is given.
Soft-deleted users are hidden from every read.
"""

from __future__ import annotations

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Role, User
from iam.domain.value_objects import UserId
from iam.infrastructure.models import RoleModel, UserModel
from iam.infrastructure.observability import (
    DefaultTenantOwnedRepositoryProbe,
    TenantOwnedRepositoryProbe,
)
from iam.infrastructure.tenant_scope import (
    apply_tenant_scope,
    assign_tenant,
    ensure_tenant_access,
    for_tenant,
)
from iam.ports.exceptions import (
    CrossTenantAccessError,
    DuplicateUserEmailError,
    MissingTenantError,
    RoleNotFoundError,
    UserNotFoundError,
)
from iam.ports.repositories import IUserRepository
from shared_kernel.tenancy import TenantManager


class UserRepository(IUserRepository):
    """Repository managing PostgreSQL storage for User aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        tenant_manager: TenantManager,
        probe: TenantOwnedRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session and tenant manager.

        Args:
            session: AsyncSession from FastAPI dependency injection
            tenant_manager: Source of the current tenant for scoping
            probe: Optional domain probe for observability
        """
        self._session = session
        self._tenants = tenant_manager
        self._probe = probe or DefaultTenantOwnedRepositoryProbe()

    async def save(self, user: User) -> User:
        """Insert or update a user.

        Raises:
            MissingTenantError: If no organization is given or bound
            CrossTenantAccessError: If a new user names another tenant's
                organization
            DuplicateUserEmailError: If the email already exists
        """
        # Soft-deleted users keep their email
        stmt = select(UserModel.id).where(UserModel.email == user.email)
        result = await self._session.execute(stmt)
        owner_id = result.scalar_one_or_none()
        if owner_id is not None and owner_id != user.id.value:
            self._probe.duplicate_record("user", user.email)
            raise DuplicateUserEmailError(f"User '{user.email}' already exists")

        stmt = self._live().where(UserModel.id == user.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model:
            model.name = user.name
            model.email = user.email
        else:
            if user.organization_id is not None:
                self._check_access("user", user.organization_id)
            model = UserModel(
                id=user.id.value,
                name=user.name,
                email=user.email,
                organization_id=user.organization_id,
                roles=[],
            )
            try:
                assign_tenant(model, self._tenants)
            except MissingTenantError:
                self._probe.missing_tenant("user")
                raise
            if user.organization_id is None:
                self._probe.tenant_assigned(
                    "user", user.id.value, model.organization_id
                )
            self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            if "ix_users_email" in str(e):
                self._probe.duplicate_record("user", user.email)
                raise DuplicateUserEmailError(
                    f"User '{user.email}' already exists"
                ) from e
            raise

        self._probe.record_saved("user", model.id, model.organization_id)
        return self._to_domain(model)

    async def get_by_id(self, user_id: UserId, scoped: bool = True) -> User | None:
        model = await self._get_model(user_id.value, scoped=scoped)
        if model is None:
            return None
        return self._to_domain(model)

    async def list_all(
        self, organization_id: int | None = None, scoped: bool = True
    ) -> list[User]:
        stmt = self._live().order_by(UserModel.name)
        if organization_id is not None:
            if scoped:
                self._check_access("user", organization_id)
            stmt = for_tenant(stmt, UserModel, organization_id)
        elif scoped:
            stmt = apply_tenant_scope(stmt, UserModel, self._tenants)

        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count(self, scoped: bool = True) -> int:
        stmt = (
            select(func.count())
            .select_from(UserModel)
            .where(UserModel.deleted_at.is_(None))
        )
        if scoped:
            stmt = apply_tenant_scope(stmt, UserModel, self._tenants)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def delete(self, user: User) -> bool:
        model = await self._get_model(user.id.value)
        if model is None:
            return False

        model.soft_delete()
        await self._session.flush()
        self._probe.record_deleted("user", model.id, model.organization_id)
        return True

    async def assign_role(self, user: User, role: Role) -> User:
        """Link a role to a user.

        Raises:
            UserNotFoundError: If the user is not visible
            RoleNotFoundError: If the role is not visible
            CrossTenantAccessError: If the role belongs to another organization
        """
        model = await self._require_model(user)

        stmt = select(RoleModel).where(
            RoleModel.id == role.id.value, RoleModel.deleted_at.is_(None)
        )
        stmt = apply_tenant_scope(stmt, RoleModel, self._tenants)
        result = await self._session.execute(stmt)
        role_model = result.scalar_one_or_none()
        if role_model is None:
            raise RoleNotFoundError(f"Role {role.id} not found")

        if role_model.organization_id != model.organization_id:
            self._probe.cross_tenant_access_denied(
                "role", role_model.organization_id, model.organization_id
            )
            raise CrossTenantAccessError(
                f"Role {role.id} belongs to another organization than user {user.id}"
            )

        if all(r.id != role_model.id for r in model.roles):
            model.roles.append(role_model)
            await self._session.flush()
            self._probe.role_assigned(model.id, role_model.id)
        return self._to_domain(model)

    async def remove_role(self, user: User, role: Role) -> User:
        model = await self._require_model(user)

        remaining = [r for r in model.roles if r.id != role.id.value]
        if len(remaining) != len(model.roles):
            model.roles = remaining
            await self._session.flush()
            self._probe.role_removed(model.id, role.id.value)
        return self._to_domain(model)

    async def _get_model(self, user_id: str, scoped: bool = True) -> UserModel | None:
        stmt = self._live().where(UserModel.id == user_id)
        if scoped:
            stmt = apply_tenant_scope(stmt, UserModel, self._tenants)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _require_model(self, user: User) -> UserModel:
        model = await self._get_model(user.id.value)
        if model is None:
            raise UserNotFoundError(f"User {user.id} not found")
        return model

    def _check_access(self, kind: str, organization_id: int) -> None:
        try:
            ensure_tenant_access(organization_id, self._tenants)
        except CrossTenantAccessError:
            self._probe.cross_tenant_access_denied(
                kind, organization_id, self._tenants.get_current_tenant_id()
            )
            raise

    @staticmethod
    def _live() -> Select[tuple[UserModel]]:
        return select(UserModel).where(UserModel.deleted_at.is_(None))

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        return User(
            id=UserId(value=model.id),
            name=model.name,
            email=model.email,
            organization_id=model.organization_id,
            role_slugs=frozenset(r.slug for r in model.roles if r.deleted_at is None),
        )
