"""Theater and platform dashboard endpoints."""

from fastapi import APIRouter, Depends

from cinebooker.api.deps import get_gateway, require_view
from cinebooker.models import Theater, User
from cinebooker.roles import View
from cinebooker.schemas.dashboard import (
    PlatformDashboardResponse,
    TheaterDashboardResponse,
    TheaterStatusUpdate,
)
from cinebooker.schemas.theater import TheaterResponse
from cinebooker.services.dashboard import DashboardService
from cinebooker.services.gateway import Gateway

router = APIRouter()


@router.get("/dashboard/theater", response_model=TheaterDashboardResponse)
async def get_theater_dashboard(
    gateway: Gateway = Depends(get_gateway),
    user: User = Depends(require_view(View.THEATER_DASHBOARD)),
) -> TheaterDashboardResponse:
    stats = await DashboardService(gateway).theater_stats(user)
    return TheaterDashboardResponse(
        theater=TheaterResponse.model_validate(stats.theater) if stats.theater else None,
        total_bookings=stats.total_bookings,
        today_revenue=stats.today_revenue,
        occupancy_rate=stats.occupancy_rate,
        upcoming_shows=stats.upcoming_shows,
    )


@router.get("/dashboard/platform", response_model=PlatformDashboardResponse)
async def get_platform_dashboard(
    gateway: Gateway = Depends(get_gateway),
    _: User = Depends(require_view(View.PLATFORM_DASHBOARD)),
) -> PlatformDashboardResponse:
    stats = await DashboardService(gateway).platform_stats()
    return PlatformDashboardResponse(
        total_theaters=stats.total_theaters,
        total_movies=stats.total_movies,
        total_users=stats.total_users,
        total_revenue=stats.total_revenue,
        pending_theaters=[TheaterResponse.model_validate(theater) for theater in stats.pending_theaters],
    )


@router.post("/dashboard/platform/theaters/{theater_id}/status", response_model=TheaterResponse)
async def set_theater_status(
    theater_id: str,
    request: TheaterStatusUpdate,
    gateway: Gateway = Depends(get_gateway),
    user: User = Depends(require_view(View.PLATFORM_DASHBOARD)),
) -> Theater:
    """Approve or reject a pending theater."""
    return await DashboardService(gateway).set_theater_status(theater_id, request.status, user)
