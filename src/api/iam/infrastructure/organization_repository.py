"""PostgreSQL implementation of IOrganizationRepository.

Organizations are the tenants themselves, so none of these queries are
tenant-scoped. Soft-deleted organizations are hidden from every read.
"""

from __future__ import annotations

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Organization
from iam.domain.value_objects import Slug
from iam.infrastructure.models import OrganizationModel, RoleModel, UserModel
from iam.infrastructure.observability import (
    DefaultOrganizationRepositoryProbe,
    OrganizationRepositoryProbe,
)
from iam.ports.exceptions import (
    DuplicateOrganizationSlugError,
    OrganizationInUseError,
)
from iam.ports.repositories import IOrganizationRepository


class OrganizationRepository(IOrganizationRepository):
    """Repository managing PostgreSQL storage for Organization aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: OrganizationRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultOrganizationRepositoryProbe()

    async def save(self, organization: Organization) -> Organization:
        """Insert or update an organization.

        Raises:
            DuplicateOrganizationSlugError: If another organization owns the slug
        """
        # Soft-deleted organizations keep their slug
        stmt = select(OrganizationModel.id).where(
            OrganizationModel.slug == organization.slug.value
        )
        result = await self._session.execute(stmt)
        owner_id = result.scalar_one_or_none()
        if owner_id is not None and owner_id != organization.id:
            self._probe.duplicate_organization_slug(organization.slug.value)
            raise DuplicateOrganizationSlugError(
                f"Organization slug '{organization.slug}' already exists"
            )

        try:
            model = None
            if organization.id is not None:
                stmt = select(OrganizationModel).where(
                    OrganizationModel.id == organization.id
                )
                result = await self._session.execute(stmt)
                model = result.scalar_one_or_none()

            if model:
                model.name = organization.name
                model.slug = organization.slug.value
                model.description = organization.description
                model.is_active = organization.is_active
            else:
                model = OrganizationModel(
                    uuid=organization.uuid,
                    name=organization.name,
                    slug=organization.slug.value,
                    description=organization.description,
                    is_active=organization.is_active,
                )
                self._session.add(model)

            # Flush so the autoincrement id is assigned
            await self._session.flush()

        except IntegrityError as e:
            if "ix_organizations_slug" in str(e):
                self._probe.duplicate_organization_slug(organization.slug.value)
                raise DuplicateOrganizationSlugError(
                    f"Organization slug '{organization.slug}' already exists"
                ) from e
            raise

        organization.id = model.id
        self._probe.organization_saved(model.id, model.slug)
        return organization

    async def get_by_id(
        self, organization_id: int, active_only: bool = False
    ) -> Organization | None:
        stmt = self._live().where(OrganizationModel.id == organization_id)
        if active_only:
            stmt = stmt.where(OrganizationModel.is_active.is_(True))
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        self._probe.organization_retrieved(model.id)
        return self._to_domain(model)

    async def get_by_slug(
        self, slug: str, active_only: bool = False
    ) -> Organization | None:
        stmt = self._live().where(OrganizationModel.slug == slug)
        if active_only:
            stmt = stmt.where(OrganizationModel.is_active.is_(True))
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        self._probe.organization_retrieved(model.id)
        return self._to_domain(model)

    async def list_all(
        self, search: str | None = None, is_active: bool | None = None
    ) -> list[Organization]:
        stmt = self._live().order_by(OrganizationModel.name)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    OrganizationModel.name.ilike(pattern),
                    OrganizationModel.description.ilike(pattern),
                )
            )
        if is_active is not None:
            stmt = stmt.where(OrganizationModel.is_active.is_(is_active))

        result = await self._session.execute(stmt)
        models = result.scalars().all()

        self._probe.organizations_listed(len(models))
        return [self._to_domain(model) for model in models]

    async def count(self) -> int:
        stmt = (
            select(func.count())
            .select_from(OrganizationModel)
            .where(OrganizationModel.deleted_at.is_(None))
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def delete(self, organization: Organization) -> bool:
        """Soft-delete an organization.

        Organizations that still own users or roles that are not deleted
        themselves cannot be deleted.

        Raises:
            OrganizationInUseError: If users or roles still belong to it
        """
        if organization.id is None:
            return False

        stmt = self._live().where(OrganizationModel.id == organization.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return False

        if await self._has_members(model.id):
            raise OrganizationInUseError(
                f"Organization '{organization.slug}' still owns users or roles"
            )

        model.soft_delete()
        await self._session.flush()

        self._probe.organization_deleted(organization.id)
        return True

    async def _has_members(self, organization_id: int) -> bool:
        users = select(UserModel.id).where(
            UserModel.organization_id == organization_id,
            UserModel.deleted_at.is_(None),
        )
        roles = select(RoleModel.id).where(
            RoleModel.organization_id == organization_id,
            RoleModel.deleted_at.is_(None),
        )
        result = await self._session.execute(
            select(or_(users.exists(), roles.exists()))
        )
        return bool(result.scalar_one())

    @staticmethod
    def _live() -> Select[tuple[OrganizationModel]]:
        return select(OrganizationModel).where(OrganizationModel.deleted_at.is_(None))

    @staticmethod
    def _to_domain(model: OrganizationModel) -> Organization:
        return Organization(
            id=model.id,
            uuid=model.uuid,
            name=model.name,
            slug=Slug(model.slug),
            description=model.description,
            is_active=model.is_active,
        )
