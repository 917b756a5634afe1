"""PostgreSQL implementation of IRoleRepository."""

from __future__ import annotations

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Role
from iam.domain.value_objects import RoleId, Slug
from iam.infrastructure.models import RoleModel
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
    DuplicateRoleSlugError,
    MissingTenantError,
)
from iam.ports.repositories import IRoleRepository
from shared_kernel.tenancy import TenantManager


class RoleRepository(IRoleRepository):
    """Repository managing PostgreSQL storage for Role aggregates.

    Role slugs are unique per organization, enforced by the
    ``uq_roles_organization_slug`` constraint. Deleted roles keep their slug.
    """

    def __init__(
        self,
        session: AsyncSession,
        tenant_manager: TenantManager,
        probe: TenantOwnedRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._tenants = tenant_manager
        self._probe = probe or DefaultTenantOwnedRepositoryProbe()

    async def save(self, role: Role) -> Role:
        """Insert or update a role.

        Raises:
            MissingTenantError: If no organization is given or bound
            CrossTenantAccessError: If a new role names another tenant's
                organization
            DuplicateRoleSlugError: If the slug exists in the organization
        """
        stmt = self._live().where(RoleModel.id == role.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model:
            model.name = role.name
            model.slug = role.slug.value
            model.description = role.description
        else:
            if role.organization_id is not None:
                self._check_access(role.organization_id)
            model = RoleModel(
                id=role.id.value,
                name=role.name,
                slug=role.slug.value,
                description=role.description,
                organization_id=role.organization_id,
            )
            try:
                assign_tenant(model, self._tenants)
            except MissingTenantError:
                self._probe.missing_tenant("role")
                raise
            if role.organization_id is None:
                self._probe.tenant_assigned(
                    "role", role.id.value, model.organization_id
                )
            self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            if "uq_roles_organization_slug" in str(e):
                self._probe.duplicate_record("role", role.slug.value)
                raise DuplicateRoleSlugError(
                    f"Role '{role.slug}' already exists in this organization"
                ) from e
            raise

        self._probe.record_saved("role", model.id, model.organization_id)
        return self._to_domain(model)

    async def get_by_id(self, role_id: RoleId, scoped: bool = True) -> Role | None:
        model = await self._get_model(role_id.value, scoped=scoped)
        if model is None:
            return None
        return self._to_domain(model)

    async def list_all(
        self, organization_id: int | None = None, scoped: bool = True
    ) -> list[Role]:
        stmt = self._live().order_by(RoleModel.name)
        if organization_id is not None:
            if scoped:
                self._check_access(organization_id)
            stmt = for_tenant(stmt, RoleModel, organization_id)
        elif scoped:
            stmt = apply_tenant_scope(stmt, RoleModel, self._tenants)

        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count(self, scoped: bool = True) -> int:
        stmt = (
            select(func.count())
            .select_from(RoleModel)
            .where(RoleModel.deleted_at.is_(None))
        )
        if scoped:
            stmt = apply_tenant_scope(stmt, RoleModel, self._tenants)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def delete(self, role: Role) -> bool:
        model = await self._get_model(role.id.value)
        if model is None:
            return False

        model.soft_delete()
        await self._session.flush()
        self._probe.record_deleted("role", model.id, model.organization_id)
        return True

    async def _get_model(self, role_id: str, scoped: bool = True) -> RoleModel | None:
        stmt = self._live().where(RoleModel.id == role_id)
        if scoped:
            stmt = apply_tenant_scope(stmt, RoleModel, self._tenants)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _check_access(self, organization_id: int) -> None:
        try:
            ensure_tenant_access(organization_id, self._tenants)
        except CrossTenantAccessError:
            self._probe.cross_tenant_access_denied(
                "role", organization_id, self._tenants.get_current_tenant_id()
            )
            raise

    @staticmethod
    def _live() -> Select[tuple[RoleModel]]:
        return select(RoleModel).where(RoleModel.deleted_at.is_(None))

    @staticmethod
    def _to_domain(model: RoleModel) -> Role:
        return Role(
            id=RoleId(value=model.id),
            name=model.name,
            slug=Slug(model.slug),
            description=model.description,
            organization_id=model.organization_id,
        )
