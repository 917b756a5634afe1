from dashboard.application.services import StatsOverviewService

__all__ = ["StatsOverviewService"]
