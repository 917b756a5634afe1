"""Tenant scoping for SQLAlchemy statements.

Tenant-owned models (those using ``TenantOwnedMixin``) are filtered to the
organization bound in the current unit of work. When no tenant is bound
(platform-level access) statements are left untouched.

Usage:
    stmt = apply_tenant_scope(select(UserModel), UserModel, manager)
    stmt = for_tenant(select(UserModel), UserModel, organization_id=7)
    ensure_tenant_access(7, manager)
"""

from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy import Select

from iam.infrastructure.models.base import TenantOwnedMixin
from iam.ports.exceptions import CrossTenantAccessError, MissingTenantError
from shared_kernel.tenancy import TenantManager

S = TypeVar("S", bound=Select[Any])
M = TypeVar("M", bound=TenantOwnedMixin)


def is_tenant_owned(model: type[Any]) -> bool:
    """Return True if the model carries an ``organization_id`` via the mixin."""
    return isinstance(model, type) and issubclass(model, TenantOwnedMixin)


def apply_tenant_scope(statement: S, model: type[Any], manager: TenantManager) -> S:
    """Restrict ``statement`` to the current tenant.

    Applied only when a tenant is bound and the model is tenant-owned.

    Args:
        statement: The select statement to scope
        model: The ORM model the statement reads from
        manager: Tenant manager holding the current unit of work's binding

    Returns:
        The scoped statement, or the original one when scoping does not apply
    """
    organization_id = manager.get_current_tenant_id()
    if organization_id is None or not is_tenant_owned(model):
        return statement
    return for_tenant(statement, model, organization_id)


def for_tenant(statement: S, model: type[Any], organization_id: int) -> S:
    """Restrict ``statement`` to one organization, ignoring the current tenant.

    Raises:
        TypeError: If the model is not tenant-owned
    """
    if not is_tenant_owned(model):
        raise TypeError(f"{model.__name__} is not tenant-owned")
    return statement.where(model.organization_id == organization_id)


def ensure_tenant_access(organization_id: int, manager: TenantManager) -> None:
    """Check that the current unit of work may address ``organization_id``.

    With a tenant bound only its own organization is allowed. Without one
    (platform-level access) any organization is.

    Raises:
        CrossTenantAccessError: If another tenant is bound
    """
    current = manager.get_current_tenant_id()
    if current is not None and current != organization_id:
        raise CrossTenantAccessError(
            f"Organization {organization_id} is not the current tenant ({current})"
        )


def assign_tenant(record: M, manager: TenantManager) -> M:
    """Fill ``organization_id`` of a new record from the current tenant.

    An explicitly set ``organization_id`` is never overridden.

    Raises:
        MissingTenantError: If the record has no organization and no tenant
            is bound
    """
    if record.organization_id is not None:
        return record

    organization_id = manager.get_current_tenant_id()
    if organization_id is None:
        raise MissingTenantError(
            f"{type(record).__name__} requires an organization_id "
            "when no tenant is bound"
        )
    record.organization_id = organization_id
    return record
