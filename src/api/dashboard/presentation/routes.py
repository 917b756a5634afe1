"""HTTP routes for the dashboard overview."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from dashboard.application import StatsOverviewService
from dashboard.dependencies import get_stats_overview_service
from dashboard.presentation.models import StatCardResponse

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)


@router.get("/stats")
async def get_stats_overview(
    service: Annotated[StatsOverviewService, Depends(get_stats_overview_service)],
) -> list[StatCardResponse]:
    """Get the dashboard stat cards.

    Users and roles are counted within the current tenant; organizations
    are always counted system-wide.

    Raises:
        HTTPException: 500 for unexpected errors
    """
    try:
        cards = await service.get_stats()
        return [StatCardResponse.from_domain(card) for card in cards]

    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute dashboard stats",
        )
