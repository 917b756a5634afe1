"""Domain-Oriented Observability for IAM infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from iam.infrastructure.observability.repository_probe import (
    DefaultOrganizationRepositoryProbe,
    DefaultTenantOwnedRepositoryProbe,
    OrganizationRepositoryProbe,
    TenantOwnedRepositoryProbe,
)

__all__ = [
    "OrganizationRepositoryProbe",
    "DefaultOrganizationRepositoryProbe",
    "TenantOwnedRepositoryProbe",
    "DefaultTenantOwnedRepositoryProbe",
]
