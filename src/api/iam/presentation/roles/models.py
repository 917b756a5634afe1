"""Pydantic models for role API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.domain.aggregates import Role
from iam.domain.value_objects import SLUG_PATTERN


class CreateRoleRequest(BaseModel):
    """Request model for creating a role."""

    name: str = Field(..., description="Role name", min_length=1, max_length=255)
    slug: str = Field(
        ...,
        description="Slug, unique within the organization",
        min_length=1,
        max_length=255,
        pattern=SLUG_PATTERN.pattern,
    )
    description: str | None = Field(None, max_length=1000)
    organization_id: int | None = Field(
        None, description="Organization to create the role in"
    )


class UpdateRoleRequest(BaseModel):
    """Request model for a partial role update.

    Fields left out are unchanged.
    """

    name: str | None = Field(
        None, description="Role name", min_length=1, max_length=255
    )
    slug: str | None = Field(
        None,
        description="Slug, unique within the organization",
        min_length=1,
        max_length=255,
        pattern=SLUG_PATTERN.pattern,
    )
    description: str | None = Field(None, max_length=1000)


class RoleResponse(BaseModel):
    """Response model for role."""

    id: str = Field(..., description="Role ID (ULID format)")
    name: str
    slug: str
    description: str | None = None
    organization_id: int

    @classmethod
    def from_domain(cls, role: Role) -> RoleResponse:
        return cls(
            id=role.id.value,
            name=role.name,
            slug=role.slug.value,
            description=role.description,
            organization_id=role.organization_id,
        )
