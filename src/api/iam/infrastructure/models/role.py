"""SQLAlchemy ORM model for the roles table."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from iam.infrastructure.models.base import TenantOwnedMixin
from infrastructure.database.models import Base, SoftDeleteMixin, TimestampMixin


class RoleModel(Base, TenantOwnedMixin, TimestampMixin, SoftDeleteMixin):
    """ORM model for roles table.

    Role slugs are unique per organization (``uq_roles_organization_slug``).
    """

    __tablename__ = "roles"
    __table_args__ = (
        UniqueConstraint("organization_id", "slug", name="uq_roles_organization_slug"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<RoleModel(id={self.id}, organization_id={self.organization_id})>"
