"""Domain probe for current-tenant binding.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to binding and releasing the tenant
of a unit of work.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantManagerProbe(Protocol):
    """Domain probe for tenant manager operations."""

    def tenant_bound(self, tenant_id: int | None) -> None:
        """Record that a tenant (or explicitly no tenant) was bound."""
        ...

    def tenant_cleared(self) -> None:
        """Record that the current tenant was cleared."""
        ...

    def tenant_context_released(self, tenant_id: int | None) -> None:
        """Record that a unit of work ended and its binding was released."""
        ...

    def with_context(self, context: ObservationContext) -> TenantManagerProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantManagerProbe:
    """Default implementation of TenantManagerProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantManagerProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantManagerProbe(logger=self._logger, context=context)

    def tenant_bound(self, tenant_id: int | None) -> None:
        """Record that a tenant (or explicitly no tenant) was bound."""
        self._logger.debug(
            "tenant_bound",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_cleared(self) -> None:
        """Record that the current tenant was cleared."""
        self._logger.debug(
            "tenant_cleared",
            **self._get_context_kwargs(),
        )

    def tenant_context_released(self, tenant_id: int | None) -> None:
        """Record that a unit of work ended and its binding was released."""
        self._logger.debug(
            "tenant_context_released",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )
