"""Domain-Oriented Observability for the dashboard application layer."""

from dashboard.application.observability.stats_service_probe import (
    DefaultStatsServiceProbe,
    StatsServiceProbe,
)

__all__ = ["StatsServiceProbe", "DefaultStatsServiceProbe"]
