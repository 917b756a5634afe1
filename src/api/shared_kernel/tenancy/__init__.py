"""Shared tenancy primitives.

Contains the Organization snapshot, the context-scoped TenantManager and
the global helpers. Framework-agnostic: nothing here knows about HTTP or
the database; resolution of *which* tenant applies lives in the IAM
bounded context.
"""

from shared_kernel.tenancy.helpers import tenant, tenant_id, tenant_manager
from shared_kernel.tenancy.organization import Organization
from shared_kernel.tenancy.tenant_manager import (
    TenantBinding,
    TenantManager,
    get_tenant_manager,
)

__all__ = [
    "Organization",
    "TenantBinding",
    "TenantManager",
    "get_tenant_manager",
    "tenant",
    "tenant_id",
    "tenant_manager",
]
