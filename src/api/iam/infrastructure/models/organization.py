"""SQLAlchemy ORM model for the organizations table.

Organizations are the tenants of the system and the top-level isolation
boundary. Their slug is the subdomain a tenant is served from.
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, SoftDeleteMixin, TimestampMixin


class OrganizationModel(Base, TimestampMixin, SoftDeleteMixin):
    """ORM model for organizations table.

    Note: slugs are globally unique (``ix_organizations_slug``), soft-deleted
    organizations included.
    """

    __tablename__ = "organizations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uuid: Mapped[str] = mapped_column(String(26), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<OrganizationModel(id={self.id}, slug={self.slug})>"
