from dashboard.ports.repositories import IStatsRepository

__all__ = ["IStatsRepository"]
