"""Pydantic schemas for API requests and responses."""

from cinebooker.schemas.booking import BookingCreate, BookingDetailResponse, BookingResponse
from cinebooker.schemas.checkin import CheckedInBookingResponse, CheckInRequest, CheckInResponse
from cinebooker.schemas.dashboard import (
    PlatformDashboardResponse,
    TheaterDashboardResponse,
    TheaterStatusUpdate,
)
from cinebooker.schemas.movie import CatalogResponse, FacetsResponse, MovieResponse
from cinebooker.schemas.review import ReviewCreate, ReviewResponse
from cinebooker.schemas.showtime import (
    HoldRequest,
    HoldResponse,
    SeatMapResponse,
    SeatRowResponse,
    ShowtimeResponse,
    ShowtimesForDateResponse,
    ShowtimeSlot,
    TheaterShowtimesResponse,
)
from cinebooker.schemas.theater import ScreenResponse, TheaterResponse
from cinebooker.schemas.user import ProfileResponse, ProfileUpdate, UserResponse

__all__ = [
    "BookingCreate",
    "BookingDetailResponse",
    "BookingResponse",
    "CatalogResponse",
    "CheckInRequest",
    "CheckInResponse",
    "CheckedInBookingResponse",
    "FacetsResponse",
    "HoldRequest",
    "HoldResponse",
    "MovieResponse",
    "PlatformDashboardResponse",
    "ProfileResponse",
    "ProfileUpdate",
    "ReviewCreate",
    "ReviewResponse",
    "ScreenResponse",
    "SeatMapResponse",
    "SeatRowResponse",
    "ShowtimeResponse",
    "ShowtimeSlot",
    "ShowtimesForDateResponse",
    "TheaterDashboardResponse",
    "TheaterResponse",
    "TheaterShowtimesResponse",
    "TheaterStatusUpdate",
    "UserResponse",
]
