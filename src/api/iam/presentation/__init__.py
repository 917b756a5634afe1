"""IAM presentation layer - aggregate-based organization.

Organizes presentation concerns by domain aggregate (organizations, users,
roles) plus tenant switching, following vertical slicing and DDD
principles. Each package contains its own routes and models.
"""

from __future__ import annotations

from fastapi import APIRouter

from iam.presentation import organizations, roles, tenant_switch, users
from iam.presentation.middleware import TenantResolverMiddleware

router = APIRouter(tags=["iam"])

router.include_router(organizations.router)
router.include_router(users.router)
router.include_router(roles.router)
router.include_router(tenant_switch.router)

__all__ = ["router", "TenantResolverMiddleware"]
