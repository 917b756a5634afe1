"""Pydantic models for user API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from iam.domain.aggregates import User


class CreateUserRequest(BaseModel):
    """Request model for creating a user.

    Without ``organization_id`` the user joins the current tenant.
    """

    name: str = Field(..., description="Full name", min_length=1, max_length=255)
    email: EmailStr = Field(..., description="Unique email address")
    organization_id: int | None = Field(
        None, description="Organization to create the user in"
    )


class UpdateUserRequest(BaseModel):
    """Request model for a partial user update.

    Fields left out are unchanged.
    """

    name: str | None = Field(
        None, description="Full name", min_length=1, max_length=255
    )
    email: EmailStr | None = Field(None, description="Unique email address")


class UserResponse(BaseModel):
    """Response model for user."""

    id: str = Field(..., description="User ID (ULID format)")
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")
    organization_id: int = Field(..., description="Owning organization")
    roles: list[str] = Field(default_factory=list, description="Slugs of held roles")

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        return cls(
            id=user.id.value,
            name=user.name,
            email=user.email,
            organization_id=user.organization_id,
            roles=sorted(user.role_slugs),
        )
