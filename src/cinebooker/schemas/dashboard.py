"""Pydantic schemas for the role dashboards."""

from typing import Literal

from pydantic import BaseModel

from cinebooker.schemas.theater import TheaterResponse


class TheaterDashboardResponse(BaseModel):
    theater: TheaterResponse | None = None
    total_bookings: int
    today_revenue: float
    occupancy_rate: float
    upcoming_shows: int


class PlatformDashboardResponse(BaseModel):
    total_theaters: int
    total_movies: int
    total_users: int
    total_revenue: float
    pending_theaters: list[TheaterResponse]


class TheaterStatusUpdate(BaseModel):
    """Decision on a pending theater registration."""

    status: Literal["approved", "rejected"]
