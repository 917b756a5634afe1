from dashboard.domain.value_objects import StatCard, StatColor

__all__ = ["StatCard", "StatColor"]
