"""Observability for shared tenancy operations."""

from shared_kernel.tenancy.observability.tenant_manager_probe import (
    DefaultTenantManagerProbe,
    TenantManagerProbe,
)

__all__ = [
    "DefaultTenantManagerProbe",
    "TenantManagerProbe",
]
