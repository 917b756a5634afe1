"""Pydantic models for dashboard API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from dashboard.domain import StatCard


class StatCardResponse(BaseModel):
    """One dashboard count widget."""

    label: str = Field(..., description="Card title")
    value: int = Field(..., description="Count shown on the card")
    description: str = Field(..., description="Text under the count")
    icon: str = Field(..., description="Heroicon name")
    color: str = Field(..., description="Color family")

    @classmethod
    def from_domain(cls, card: StatCard) -> StatCardResponse:
        return cls(
            label=card.label,
            value=card.value,
            description=card.description,
            icon=card.icon,
            color=card.color.value,
        )
