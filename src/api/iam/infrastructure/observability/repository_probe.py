"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to organization, user and role
repository operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class OrganizationRepositoryProbe(Protocol):
    """Domain probe for organization repository operations."""

    def organization_saved(self, organization_id: int, slug: str) -> None:
        """Record that an organization was successfully saved."""
        ...

    def organization_retrieved(self, organization_id: int) -> None:
        """Record that an organization was retrieved."""
        ...

    def organizations_listed(self, count: int) -> None:
        """Record that organizations were listed."""
        ...

    def organization_deleted(self, organization_id: int) -> None:
        """Record that an organization was deleted."""
        ...

    def duplicate_organization_slug(self, slug: str) -> None:
        """Record that a duplicate organization slug was detected."""
        ...

    def with_context(self, context: ObservationContext) -> OrganizationRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class TenantOwnedRepositoryProbe(Protocol):
    """Domain probe for repositories of tenant-owned records (users, roles)."""

    def record_saved(self, kind: str, record_id: str, organization_id: int) -> None:
        """Record that a tenant-owned record was saved."""
        ...

    def tenant_assigned(self, kind: str, record_id: str, organization_id: int) -> None:
        """Record that a record inherited the current tenant on creation."""
        ...

    def missing_tenant(self, kind: str) -> None:
        """Record that a record was created with no organization and no tenant."""
        ...

    def duplicate_record(self, kind: str, key: str) -> None:
        """Record that a uniqueness rule was violated."""
        ...

    def record_deleted(self, kind: str, record_id: str, organization_id: int) -> None:
        """Record that a tenant-owned record was soft-deleted."""
        ...

    def cross_tenant_access_denied(
        self, kind: str, organization_id: int, current_tenant_id: int | None
    ) -> None:
        """Record that another tenant's organization was addressed."""
        ...

    def role_assigned(self, user_id: str, role_id: str) -> None:
        """Record that a role was given to a user."""
        ...

    def role_removed(self, user_id: str, role_id: str) -> None:
        """Record that a role was taken from a user."""
        ...

    def with_context(self, context: ObservationContext) -> TenantOwnedRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultOrganizationRepositoryProbe:
    """Default implementation of OrganizationRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultOrganizationRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultOrganizationRepositoryProbe(logger=self._logger, context=context)

    def organization_saved(self, organization_id: int, slug: str) -> None:
        """Record that an organization was successfully saved."""
        self._logger.info(
            "organization_saved",
            organization_id=organization_id,
            slug=slug,
            **self._get_context_kwargs(),
        )

    def organization_retrieved(self, organization_id: int) -> None:
        """Record that an organization was retrieved."""
        self._logger.debug(
            "organization_retrieved",
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def organizations_listed(self, count: int) -> None:
        """Record that organizations were listed."""
        self._logger.debug(
            "organizations_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def organization_deleted(self, organization_id: int) -> None:
        """Record that an organization was deleted."""
        self._logger.info(
            "organization_deleted",
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def duplicate_organization_slug(self, slug: str) -> None:
        """Record that a duplicate organization slug was detected."""
        self._logger.warning(
            "duplicate_organization_slug",
            slug=slug,
            **self._get_context_kwargs(),
        )


class DefaultTenantOwnedRepositoryProbe:
    """Default implementation of TenantOwnedRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTenantOwnedRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantOwnedRepositoryProbe(logger=self._logger, context=context)

    def record_saved(self, kind: str, record_id: str, organization_id: int) -> None:
        """Record that a tenant-owned record was saved."""
        self._logger.info(
            f"{kind}_saved",
            record_id=record_id,
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def tenant_assigned(self, kind: str, record_id: str, organization_id: int) -> None:
        """Record that a record inherited the current tenant on creation."""
        self._logger.debug(
            "tenant_assigned",
            kind=kind,
            record_id=record_id,
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def missing_tenant(self, kind: str) -> None:
        """Record that a record was created with no organization and no tenant."""
        self._logger.warning(
            "tenant_missing_on_create",
            kind=kind,
            **self._get_context_kwargs(),
        )

    def duplicate_record(self, kind: str, key: str) -> None:
        """Record that a uniqueness rule was violated."""
        self._logger.warning(
            f"duplicate_{kind}",
            key=key,
            **self._get_context_kwargs(),
        )

    def record_deleted(self, kind: str, record_id: str, organization_id: int) -> None:
        """Record that a tenant-owned record was soft-deleted."""
        self._logger.info(
            f"{kind}_deleted",
            record_id=record_id,
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def cross_tenant_access_denied(
        self, kind: str, organization_id: int, current_tenant_id: int | None
    ) -> None:
        """Record that another tenant's organization was addressed."""
        self._logger.warning(
            "cross_tenant_access_denied",
            kind=kind,
            organization_id=organization_id,
            current_tenant_id=current_tenant_id,
            **self._get_context_kwargs(),
        )

    def role_assigned(self, user_id: str, role_id: str) -> None:
        """Record that a role was given to a user."""
        self._logger.info(
            "role_assigned",
            user_id=user_id,
            role_id=role_id,
            **self._get_context_kwargs(),
        )

    def role_removed(self, user_id: str, role_id: str) -> None:
        """Record that a role was taken from a user."""
        self._logger.info(
            "role_removed",
            user_id=user_id,
            role_id=role_id,
            **self._get_context_kwargs(),
        )
