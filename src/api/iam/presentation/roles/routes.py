"""HTTP routes for roles of the current tenant."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.application.services import RoleService
from iam.dependencies.role import get_role_service
from iam.domain.exceptions import InvalidSlugError
from iam.domain.value_objects import RoleId
from iam.ports.exceptions import (
    CrossTenantAccessError,
    DuplicateRoleSlugError,
    MissingTenantError,
    RoleNotFoundError,
)
from iam.presentation.roles.models import (
    CreateRoleRequest,
    RoleResponse,
    UpdateRoleRequest,
)

router = APIRouter(
    prefix="/roles",
    tags=["roles"],
)


def _parse_role_id(role_id: str) -> RoleId:
    try:
        return RoleId.from_string(role_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid role ID format: {e}",
        ) from e


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
)
async def create_role(
    request: CreateRoleRequest,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RoleResponse:
    """Create a role.

    Raises:
        HTTPException: 403 if the organization is not the current tenant
        HTTPException: 409 if the slug exists in the organization
        HTTPException: 422 if no organization is given and no tenant is bound
        HTTPException: 500 for unexpected errors
    """
    try:
        role = await service.create_role(
            name=request.name,
            slug=request.slug,
            description=request.description,
            organization_id=request.organization_id,
        )
        return RoleResponse.from_domain(role)

    except MissingTenantError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="organization_id is required when no tenant is selected",
        )
    except CrossTenantAccessError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot create roles in another organization",
        )
    except DuplicateRoleSlugError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A role with this slug already exists in the organization",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create role",
        )


@router.get("")
async def list_roles(
    service: Annotated[RoleService, Depends(get_role_service)],
    organization_id: Annotated[
        int | None,
        Query(description="Restrict to one organization (central domain only)"),
    ] = None,
) -> list[RoleResponse]:
    try:
        roles = await service.list_roles(organization_id=organization_id)
        return [RoleResponse.from_domain(r) for r in roles]

    except CrossTenantAccessError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot list roles of another organization",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list roles",
        )


@router.patch("/{role_id}")
async def update_role(
    role_id: str,
    request: UpdateRoleRequest,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RoleResponse:
    """Update a role of the current tenant.

    Raises:
        HTTPException: 400 if the role ID is invalid
        HTTPException: 404 if the role does not exist
        HTTPException: 409 if the new slug exists in the organization
        HTTPException: 500 for unexpected errors
    """
    role_id_obj = _parse_role_id(role_id)
    try:
        role = await service.update_role(
            role_id_obj,
            name=request.name,
            slug=request.slug,
            description=request.description,
        )
        return RoleResponse.from_domain(role)

    except RoleNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Role {role_id} not found",
        )
    except DuplicateRoleSlugError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A role with this slug already exists in the organization",
        )
    except InvalidSlugError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update role",
        )


@router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        204: {"description": "Role deleted successfully"},
        404: {"description": "Role not found"},
        500: {"description": "Internal server error"},
    },
)
async def delete_role(
    role_id: str,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> None:
    """Soft-delete a role of the current tenant.

    Users holding the role stop reporting it.

    Raises:
        HTTPException: 400 if the role ID is invalid
        HTTPException: 404 if the role does not exist
        HTTPException: 500 for unexpected errors
    """
    role_id_obj = _parse_role_id(role_id)
    try:
        deleted = await service.delete_role(role_id_obj)
        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Role {role_id} not found",
            )

    except HTTPException:
        raise
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete role",
        )
