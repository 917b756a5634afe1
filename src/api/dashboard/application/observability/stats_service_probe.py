"""Protocol for dashboard stats service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StatsServiceProbe(Protocol):
    """Domain probe for dashboard statistics."""

    def stats_computed(self, tenant_id: int | None, **counts: int) -> None:
        """Record the counts served for one overview."""
        ...

    def with_context(self, context: ObservationContext) -> StatsServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStatsServiceProbe:
    """Default implementation of StatsServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultStatsServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultStatsServiceProbe(logger=self._logger, context=context)

    def stats_computed(self, tenant_id: int | None, **counts: int) -> None:
        self._logger.debug(
            "dashboard_stats_computed",
            tenant_id=tenant_id,
            **counts,
            **self._get_context_kwargs(),
        )
