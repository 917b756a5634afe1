"""HTTP routes for organization management.

Organizations are the tenants; these routes are platform-level and never
tenant-scoped.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.application.services import OrganizationService
from iam.dependencies.organization import get_organization_service
from iam.domain.exceptions import InvalidSlugError
from iam.ports.exceptions import (
    DuplicateOrganizationSlugError,
    OrganizationInUseError,
    OrganizationNotFoundError,
)
from iam.presentation.organizations.models import (
    CreateOrganizationRequest,
    OrganizationResponse,
    UpdateOrganizationRequest,
)

router = APIRouter(
    prefix="/organizations",
    tags=["organizations"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
)
async def create_organization(
    request: CreateOrganizationRequest,
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> OrganizationResponse:
    """Create a new organization.

    Args:
        request: Organization creation request
        service: Organization service for orchestration

    Returns:
        OrganizationResponse with created organization details

    Raises:
        HTTPException: 409 if the slug is already taken
        HTTPException: 422 if the slug is invalid
        HTTPException: 500 for unexpected errors
    """
    try:
        organization = await service.create_organization(
            name=request.name,
            slug=request.slug,
            description=request.description,
            is_active=request.is_active,
        )
        return OrganizationResponse.from_domain(organization)

    except DuplicateOrganizationSlugError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An organization with this slug already exists",
        )
    except InvalidSlugError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create organization",
        )


@router.get("")
async def list_organizations(
    service: Annotated[OrganizationService, Depends(get_organization_service)],
    search: Annotated[
        str | None, Query(description="Match against name and description")
    ] = None,
    active: Annotated[bool | None, Query(description="Filter on active flag")] = None,
) -> list[OrganizationResponse]:
    """List organizations, optionally filtered.

    Raises:
        HTTPException: 500 for unexpected errors
    """
    try:
        organizations = await service.list_organizations(
            search=search, is_active=active
        )
        return [OrganizationResponse.from_domain(o) for o in organizations]

    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list organizations",
        )


@router.get("/{organization_id}")
async def get_organization(
    organization_id: int,
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> OrganizationResponse:
    """Get organization by ID.

    Raises:
        HTTPException: 404 if the organization does not exist
        HTTPException: 500 for unexpected errors
    """
    try:
        organization = await service.get_organization(organization_id)
        if organization is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Organization {organization_id} not found",
            )
        return OrganizationResponse.from_domain(organization)

    except HTTPException:
        raise
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve organization",
        )


@router.patch("/{organization_id}")
async def update_organization(
    organization_id: int,
    request: UpdateOrganizationRequest,
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> OrganizationResponse:
    """Update an organization.

    The resolver cache for the organization is cleared so hosts and
    switches see the change immediately.

    Raises:
        HTTPException: 404 if the organization does not exist
        HTTPException: 409 if the new slug is already taken
        HTTPException: 500 for unexpected errors
    """
    try:
        organization = await service.update_organization(
            organization_id,
            name=request.name,
            slug=request.slug,
            description=request.description,
            is_active=request.is_active,
        )
        return OrganizationResponse.from_domain(organization)

    except OrganizationNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Organization {organization_id} not found",
        )
    except DuplicateOrganizationSlugError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An organization with this slug already exists",
        )
    except InvalidSlugError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update organization",
        )


@router.delete(
    "/{organization_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        204: {"description": "Organization deleted successfully"},
        404: {"description": "Organization not found"},
        409: {"description": "Organization still owns users or roles"},
        500: {"description": "Internal server error"},
    },
)
async def delete_organization(
    organization_id: int,
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> None:
    """Delete an organization.

    Raises:
        HTTPException: 404 if the organization does not exist
        HTTPException: 409 if users or roles still belong to it
        HTTPException: 500 for unexpected errors
    """
    try:
        deleted = await service.delete_organization(organization_id)
        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Organization {organization_id} not found",
            )

    except OrganizationInUseError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Organization still owns users or roles",
        )
    except HTTPException:
        raise
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete organization",
        )
