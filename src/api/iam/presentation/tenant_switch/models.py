"""Pydantic models for tenant switch API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from shared_kernel.tenancy import Organization


class TenantSwitchResponse(BaseModel):
    """Response model for a successful tenant switch."""

    message: str = Field(..., description="Outcome of the switch")
    tenant_id: int = Field(..., description="Organization now bound as the tenant")


class ClearTenantSwitchResponse(BaseModel):
    """Response model for clearing a tenant switch."""

    message: str = Field(..., description="Outcome of the operation")


class CurrentTenantResponse(BaseModel):
    """The tenant bound to the current request."""

    id: int = Field(..., description="Organization ID")
    name: str = Field(..., description="Organization name")
    slug: str = Field(..., description="Organization slug (subdomain)")

    @classmethod
    def from_domain(cls, organization: Organization) -> CurrentTenantResponse:
        return cls(id=organization.id, name=organization.name, slug=organization.slug)


class TenantStateResponse(BaseModel):
    """Current tenant binding of the request."""

    tenant: CurrentTenantResponse | None = Field(
        None, description="The bound tenant, or null for platform-level access"
    )
    resolved: bool = Field(
        ..., description="Whether tenant resolution ran for this request"
    )
