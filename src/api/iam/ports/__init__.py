"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories without specifying
implementation details. This allows for dependency inversion and makes
the domain layer independent of infrastructure.
"""

from iam.ports.exceptions import (
    CrossTenantAccessError,
    DuplicateOrganizationSlugError,
    DuplicateRoleSlugError,
    DuplicateUserEmailError,
    MissingTenantError,
    OrganizationInUseError,
    OrganizationNotFoundError,
    RoleNotFoundError,
    UserNotFoundError,
)
from iam.ports.repositories import (
    IOrganizationRepository,
    IRoleRepository,
    IUserRepository,
)

__all__ = [
    "IOrganizationRepository",
    "IRoleRepository",
    "IUserRepository",
    "DuplicateOrganizationSlugError",
    "DuplicateRoleSlugError",
    "DuplicateUserEmailError",
    "MissingTenantError",
    "OrganizationInUseError",
    "OrganizationNotFoundError",
    "CrossTenantAccessError",
    "RoleNotFoundError",
    "UserNotFoundError",
]
