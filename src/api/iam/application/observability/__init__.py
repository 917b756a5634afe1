"""Domain-Oriented Observability for IAM application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from iam.application.observability.organization_resolver_probe import (
    DefaultOrganizationResolverProbe,
    OrganizationResolverProbe,
)
from iam.application.observability.organization_service_probe import (
    DefaultOrganizationServiceProbe,
    OrganizationServiceProbe,
)
from iam.application.observability.role_service_probe import (
    DefaultRoleServiceProbe,
    RoleServiceProbe,
)
from iam.application.observability.user_service_probe import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)

__all__ = [
    "OrganizationResolverProbe",
    "DefaultOrganizationResolverProbe",
    "OrganizationServiceProbe",
    "DefaultOrganizationServiceProbe",
    "RoleServiceProbe",
    "DefaultRoleServiceProbe",
    "UserServiceProbe",
    "DefaultUserServiceProbe",
]
