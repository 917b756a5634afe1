"""Value objects for the dashboard domain."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class StatColor(StrEnum):
    """Color family a stat card is rendered with."""

    PRIMARY = "primary"
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True)
class StatCard:
    """One count widget on the dashboard overview.

    ``icon`` is a heroicon name such as ``heroicon-o-users``.
    """

    label: str
    value: int
    description: str
    icon: str
    color: StatColor
