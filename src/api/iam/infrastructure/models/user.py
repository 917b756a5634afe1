"""SQLAlchemy ORM model for the users table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from iam.infrastructure.models.base import TenantOwnedMixin
from iam.infrastructure.models.role_user import role_user_table
from infrastructure.database.models import Base, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from iam.infrastructure.models.role import RoleModel


class UserModel(Base, TenantOwnedMixin, TimestampMixin, SoftDeleteMixin):
    """ORM model for users table.

    Users belong to exactly one organization. Emails are globally unique
    (``ix_users_email``), soft-deleted users included.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )

    # Eager "selectin" loading: lazy loads are not available under asyncio
    roles: Mapped[list[RoleModel]] = relationship(
        "RoleModel",
        secondary=role_user_table,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<UserModel(id={self.id}, organization_id={self.organization_id}, "
            f"email={self.email})>"
        )
