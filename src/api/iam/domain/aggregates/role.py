"""Role aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, replace

from iam.domain.value_objects import RoleId, Slug


@dataclass(frozen=True)
class Role:
    """Role defined inside one organization.

    Role slugs are unique per organization, not globally.
    """

    id: RoleId
    name: str
    slug: Slug
    description: str | None = None
    organization_id: int | None = None

    @classmethod
    def create(
        cls,
        name: str,
        slug: str,
        description: str | None = None,
        organization_id: int | None = None,
    ) -> Role:
        """Factory method for creating a new role."""
        return cls(
            id=RoleId.generate(),
            name=name,
            slug=Slug(slug),
            description=description,
            organization_id=organization_id,
        )

    def update(
        self,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
    ) -> Role:
        """Return a copy with the given fields changed.

        Raises:
            InvalidSlugError: If the new slug is invalid
        """
        return replace(
            self,
            name=name if name is not None else self.name,
            slug=Slug(slug) if slug is not None else self.slug,
            description=description if description is not None else self.description,
        )
