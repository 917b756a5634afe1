"""HTTP routes for switching the current tenant.

The switch is remembered in the session and re-applied on every following
request by the tenant resolver middleware.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from iam.application.services import OrganizationResolver
from iam.dependencies.tenancy import get_organization_resolver, get_tenant_manager
from iam.presentation.middleware import SWITCHED_TENANT_SESSION_KEY
from iam.presentation.tenant_switch.models import (
    ClearTenantSwitchResponse,
    CurrentTenantResponse,
    TenantStateResponse,
    TenantSwitchResponse,
)
from shared_kernel.tenancy import TenantManager

router = APIRouter(
    prefix="/tenants",
    tags=["tenants"],
)


@router.post("/switch/{tenant_id}")
async def switch_tenant(
    tenant_id: int,
    request: Request,
    resolver: Annotated[OrganizationResolver, Depends(get_organization_resolver)],
) -> TenantSwitchResponse:
    """Switch the session to another tenant.

    Args:
        tenant_id: ID of the organization to switch to
        request: Incoming request (its session stores the switch)
        resolver: Organization resolver

    Returns:
        TenantSwitchResponse confirming the switch

    Raises:
        HTTPException: 404 if the organization does not exist or is inactive
    """
    if not await resolver.switch_tenant(tenant_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tenant not found or inactive",
        )

    request.session[SWITCHED_TENANT_SESSION_KEY] = tenant_id
    return TenantSwitchResponse(
        message="Switched to tenant successfully",
        tenant_id=tenant_id,
    )


@router.delete("/switch")
async def clear_tenant_switch(
    request: Request,
    tenant_manager: Annotated[TenantManager, Depends(get_tenant_manager)],
) -> ClearTenantSwitchResponse:
    """Forget the switched tenant and clear the current binding."""
    request.session.pop(SWITCHED_TENANT_SESSION_KEY, None)
    tenant_manager.clear_tenant()
    return ClearTenantSwitchResponse(message="Cleared tenant switch")


@router.get("/current")
async def get_current_tenant(
    tenant_manager: Annotated[TenantManager, Depends(get_tenant_manager)],
) -> TenantStateResponse:
    organization = tenant_manager.get_current_tenant()
    return TenantStateResponse(
        tenant=(
            CurrentTenantResponse.from_domain(organization)
            if organization is not None
            else None
        ),
        resolved=tenant_manager.is_resolved(),
    )
