"""Protocol for organization resolver observability.

Captures tenant resolution events: cache behavior, lookups that found or
missed a tenant, storage failures and administrative tenant switches.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class OrganizationResolverProbe(Protocol):
    """Domain probe for tenant resolution."""

    def cache_hit(self, key: str) -> None: ...

    def tenant_resolved(self, key: str, organization_id: int) -> None: ...

    def tenant_not_found(self, key: str) -> None: ...

    def lookup_failed(self, key: str, error: str) -> None: ...

    def cache_cleared(self, organization_id: int, slug: str) -> None: ...

    def cache_pruned(self, expired: int, evicted: int) -> None: ...

    def tenant_switched(self, organization_id: int) -> None: ...

    def tenant_switch_rejected(self, organization_id: int) -> None: ...

    def with_context(self, context: ObservationContext) -> OrganizationResolverProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultOrganizationResolverProbe:
    """Default implementation of OrganizationResolverProbe using structlog."""

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
    ) -> DefaultOrganizationResolverProbe:
        """Create a new probe with observation context bound."""
        return DefaultOrganizationResolverProbe(logger=self._logger, context=context)

    def cache_hit(self, key: str) -> None:
        self._logger.debug(
            "tenant_cache_hit",
            key=key,
            **self._get_context_kwargs(),
        )

    def tenant_resolved(self, key: str, organization_id: int) -> None:
        self._logger.debug(
            "tenant_resolved",
            key=key,
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, key: str) -> None:
        self._logger.debug(
            "tenant_not_found",
            key=key,
            **self._get_context_kwargs(),
        )

    def lookup_failed(self, key: str, error: str) -> None:
        """Record that the organization store could not be queried."""
        self._logger.error(
            "tenant_lookup_failed",
            key=key,
            error=error,
            **self._get_context_kwargs(),
        )

    def cache_cleared(self, organization_id: int, slug: str) -> None:
        self._logger.info(
            "tenant_cache_cleared",
            organization_id=organization_id,
            slug=slug,
            **self._get_context_kwargs(),
        )

    def tenant_switched(self, organization_id: int) -> None:
        self._logger.info(
            "tenant_switched",
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def tenant_switch_rejected(self, organization_id: int) -> None:
        """Record a switch to an unknown or inactive organization."""
        self._logger.warning(
            "tenant_switch_rejected",
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def cache_pruned(self, expired: int, evicted: int) -> None:
        self._logger.debug(
            "tenant_cache_pruned",
            expired=expired,
            evicted=evicted,
            **self._get_context_kwargs(),
        )
