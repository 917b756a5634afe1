"""Organization aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field

from ulid import ULID

from iam.domain.value_objects import Slug
from shared_kernel.tenancy import Organization as TenantSnapshot


@dataclass
class Organization:
    """Organization aggregate: the tenant boundary of the system.

    Every user and role belongs to exactly one organization. Only active
    organizations can be resolved as the current tenant.

    Business rules:
    - Slugs are globally unique and valid DNS labels (they are subdomains)
    - The uuid is assigned once and never changes

    ``id`` is None until the organization has been persisted.
    """

    name: str
    slug: Slug
    description: str | None = None
    is_active: bool = True
    id: int | None = None
    uuid: str = field(default_factory=lambda: str(ULID()))

    @classmethod
    def create(
        cls,
        name: str,
        slug: str,
        description: str | None = None,
        is_active: bool = True,
    ) -> Organization:
        """Factory method for creating a new, not yet persisted organization."""
        return cls(
            name=name,
            slug=Slug(slug),
            description=description,
            is_active=is_active,
        )

    def update(
        self,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> None:
        """Apply a partial update. Arguments left as None are unchanged."""
        if name is not None:
            self.name = name
        if slug is not None:
            self.slug = Slug(slug)
        if description is not None:
            self.description = description
        if is_active is not None:
            self.is_active = is_active

    def to_tenant(self) -> TenantSnapshot:
        """Snapshot this organization for binding as the current tenant.

        Raises:
            ValueError: If the organization has not been persisted yet
        """
        if self.id is None:
            raise ValueError("Cannot bind an organization that has no id")
        return TenantSnapshot(
            id=self.id,
            name=self.name,
            slug=self.slug.value,
            is_active=self.is_active,
        )
