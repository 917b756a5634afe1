"""Pydantic models for organization API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.domain.aggregates import Organization
from iam.domain.value_objects import SLUG_PATTERN


class CreateOrganizationRequest(BaseModel):
    """Request model for creating an organization."""

    name: str = Field(
        ..., description="Organization name", min_length=1, max_length=255
    )
    slug: str = Field(
        ...,
        description="Unique slug, also used as the tenant subdomain",
        min_length=1,
        max_length=255,
        pattern=SLUG_PATTERN.pattern,
    )
    description: str | None = Field(
        None, description="Optional description", max_length=1000
    )
    is_active: bool = Field(True, description="Whether the organization is active")


class UpdateOrganizationRequest(BaseModel):
    """Request model for a partial organization update.

    Fields left out are unchanged.
    """

    name: str | None = Field(
        None, description="Organization name", min_length=1, max_length=255
    )
    slug: str | None = Field(
        None,
        description="Unique slug",
        min_length=1,
        max_length=255,
        pattern=SLUG_PATTERN.pattern,
    )
    description: str | None = Field(None, max_length=1000)
    is_active: bool | None = Field(None)


class OrganizationResponse(BaseModel):
    """Response model for organization."""

    id: int = Field(..., description="Organization ID")
    uuid: str = Field(..., description="Stable public identifier (ULID format)")
    name: str = Field(..., description="Organization name")
    slug: str = Field(..., description="Organization slug")
    description: str | None = Field(None, description="Organization description")
    is_active: bool = Field(..., description="Whether the organization is active")

    @classmethod
    def from_domain(cls, organization: Organization) -> OrganizationResponse:
        """Convert domain Organization aggregate to API response.

        Args:
            organization: Organization domain aggregate

        Returns:
            OrganizationResponse
        """
        return cls(
            id=organization.id,
            uuid=organization.uuid,
            name=organization.name,
            slug=organization.slug.value,
            description=organization.description,
            is_active=organization.is_active,
        )
