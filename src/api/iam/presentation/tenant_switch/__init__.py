"""Tenant switching for platform administrators."""

from iam.presentation.tenant_switch.routes import router

__all__ = ["router"]
