"""Mixin for tables owned by a tenant.

A model that carries an ``organization_id`` through this mixin is subject
to tenant scoping (see ``iam.infrastructure.tenant_scope``).
"""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column


class TenantOwnedMixin:
    """Adds the ``organization_id`` foreign key to organizations.id.

    RESTRICT on delete: an organization with users or roles cannot be
    removed until they are.
    """

    organization_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
