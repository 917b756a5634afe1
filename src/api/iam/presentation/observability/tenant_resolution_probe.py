"""Domain probe for per-request tenant resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of the tenant resolver middleware: which source
decided the tenant of a request, and requests rejected for lack of one.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantResolutionProbe(Protocol):
    """Domain probe for tenant resolution in the request pipeline."""

    def tenant_resolved_from_session(self, organization_id: int, path: str) -> None:
        """Record that the request used an administrator's switched tenant."""
        ...

    def tenant_resolved_from_host(
        self, organization_id: int | None, host: str, path: str
    ) -> None:
        """Record the outcome of resolving the request host."""
        ...

    def invalid_switched_tenant(self, raw_value: str) -> None:
        """Record that the session held a tenant id that is not an integer."""
        ...

    def tenant_not_found(self, host: str, path: str) -> None:
        """Record that a non-central host named no active tenant."""
        ...

    def with_context(self, context: ObservationContext) -> TenantResolutionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantResolutionProbe:
    """Default implementation of TenantResolutionProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantResolutionProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantResolutionProbe(logger=self._logger, context=context)

    def tenant_resolved_from_session(self, organization_id: int, path: str) -> None:
        self._logger.debug(
            "tenant_resolved_from_session",
            organization_id=organization_id,
            path=path,
            **self._get_context_kwargs(),
        )

    def tenant_resolved_from_host(
        self, organization_id: int | None, host: str, path: str
    ) -> None:
        self._logger.debug(
            "tenant_resolved_from_host",
            organization_id=organization_id,
            host=host,
            path=path,
            **self._get_context_kwargs(),
        )

    def invalid_switched_tenant(self, raw_value: str) -> None:
        self._logger.warning(
            "invalid_switched_tenant",
            raw_value=raw_value,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, host: str, path: str) -> None:
        self._logger.info(
            "tenant_not_found",
            host=host,
            path=path,
            **self._get_context_kwargs(),
        )
