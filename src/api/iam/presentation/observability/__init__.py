"""Domain-Oriented Observability for IAM presentation layer."""

from iam.presentation.observability.tenant_resolution_probe import (
    DefaultTenantResolutionProbe,
    TenantResolutionProbe,
)

__all__ = [
    "TenantResolutionProbe",
    "DefaultTenantResolutionProbe",
]
