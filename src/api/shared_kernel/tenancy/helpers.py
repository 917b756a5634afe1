"""Global tenant helpers.

Shortcuts for code that has no dependency-injection seam (query scopes,
model hooks, templates). Each helper reads the caller's ambient unit of
work through the process-wide TenantManager.
"""

from __future__ import annotations

from shared_kernel.tenancy.organization import Organization
from shared_kernel.tenancy.tenant_manager import TenantManager, get_tenant_manager


def tenant() -> Organization | None:
    """Get the current tenant, or None when no tenant is bound."""
    return get_tenant_manager().get_current_tenant()


def tenant_id() -> int | None:
    """Get the current tenant ID, or None when no tenant is bound."""
    return get_tenant_manager().get_current_tenant_id()


def tenant_manager() -> TenantManager:
    """Get the TenantManager instance."""
    return get_tenant_manager()
