"""HTTP routes for users of the current tenant."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.application.services import UserService
from iam.dependencies.user import get_user_service
from iam.domain.value_objects import RoleId, UserId
from iam.ports.exceptions import (
    CrossTenantAccessError,
    DuplicateUserEmailError,
    MissingTenantError,
    RoleNotFoundError,
    UserNotFoundError,
)
from iam.presentation.users.models import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
)

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


def _parse_user_id(user_id: str) -> UserId:
    try:
        return UserId.from_string(user_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid user ID format: {e}",
        ) from e


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
async def create_user(
    request: CreateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Create a user.

    Raises:
        HTTPException: 403 if the organization is not the current tenant
        HTTPException: 409 if the email is already registered
        HTTPException: 422 if no organization is given and no tenant is bound
        HTTPException: 500 for unexpected errors
    """
    try:
        user = await service.create_user(
            name=request.name,
            email=str(request.email),
            organization_id=request.organization_id,
        )
        return UserResponse.from_domain(user)

    except MissingTenantError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="organization_id is required when no tenant is selected",
        )
    except CrossTenantAccessError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot create users in another organization",
        )
    except DuplicateUserEmailError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user",
        )


@router.get("")
async def list_users(
    service: Annotated[UserService, Depends(get_user_service)],
    organization_id: Annotated[
        int | None,
        Query(description="Restrict to one organization (central domain only)"),
    ] = None,
) -> list[UserResponse]:
    """List users of the current tenant (all users on a central domain).

    Raises:
        HTTPException: 403 if organization_id names another tenant
        HTTPException: 500 for unexpected errors
    """
    try:
        users = await service.list_users(organization_id=organization_id)
        return [UserResponse.from_domain(u) for u in users]

    except CrossTenantAccessError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot list users of another organization",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list users",
        )


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Get a user of the current tenant.

    Raises:
        HTTPException: 400 if the user ID is invalid
        HTTPException: 404 if the user does not exist
    """
    user_id_obj = _parse_user_id(user_id)
    try:
        user = await service.get_user(user_id_obj)
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"User {user_id} not found",
            )
        return UserResponse.from_domain(user)

    except HTTPException:
        raise
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve user",
        )


@router.patch("/{user_id}")
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Update a user of the current tenant.

    Raises:
        HTTPException: 400 if the user ID is invalid
        HTTPException: 404 if the user does not exist
        HTTPException: 409 if the new email is already registered
        HTTPException: 500 for unexpected errors
    """
    user_id_obj = _parse_user_id(user_id)
    try:
        user = await service.update_user(
            user_id_obj,
            name=request.name,
            email=str(request.email) if request.email is not None else None,
        )
        return UserResponse.from_domain(user)

    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {user_id} not found",
        )
    except DuplicateUserEmailError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update user",
        )


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        204: {"description": "User deleted successfully"},
        404: {"description": "User not found"},
        500: {"description": "Internal server error"},
    },
)
async def delete_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
) -> None:
    """Soft-delete a user of the current tenant.

    Raises:
        HTTPException: 400 if the user ID is invalid
        HTTPException: 404 if the user does not exist
        HTTPException: 500 for unexpected errors
    """
    user_id_obj = _parse_user_id(user_id)
    try:
        deleted = await service.delete_user(user_id_obj)
        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"User {user_id} not found",
            )

    except HTTPException:
        raise
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete user",
        )


@router.put("/{user_id}/roles/{role_id}")
async def assign_role(
    user_id: str,
    role_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Give a user a role of the same organization.

    Assigning a role the user already holds is a no-op.

    Raises:
        HTTPException: 400 if an ID is invalid
        HTTPException: 403 if the role belongs to another organization
        HTTPException: 404 if the user or the role does not exist
        HTTPException: 500 for unexpected errors
    """
    user_id_obj = _parse_user_id(user_id)
    role_id_obj = _parse_role_id(role_id)
    try:
        user = await service.assign_role(user_id_obj, role_id_obj)
        return UserResponse.from_domain(user)

    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {user_id} not found",
        )
    except RoleNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Role {role_id} not found",
        )
    except CrossTenantAccessError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Role belongs to another organization",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to assign role",
        )


@router.delete("/{user_id}/roles/{role_id}")
async def remove_role(
    user_id: str,
    role_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Take a role away from a user.

    Raises:
        HTTPException: 400 if an ID is invalid
        HTTPException: 404 if the user or the role does not exist
        HTTPException: 500 for unexpected errors
    """
    user_id_obj = _parse_user_id(user_id)
    role_id_obj = _parse_role_id(role_id)
    try:
        user = await service.remove_role(user_id_obj, role_id_obj)
        return UserResponse.from_domain(user)

    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {user_id} not found",
        )
    except RoleNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Role {role_id} not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove role",
        )
