"""Pydantic schemas for booking data."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from cinebooker.schemas.movie import MovieResponse
from cinebooker.schemas.showtime import ShowtimeResponse
from cinebooker.schemas.theater import ScreenResponse, TheaterResponse


class BookingCreate(BaseModel):
    """Request to book seats for a showtime."""

    showtime_id: str
    seats: list[str] = Field(default_factory=list)


class BookingResponse(BaseModel):
    """Booking response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    showtime_id: str
    seats: list[str]
    total_amount: float
    booking_status: str
    payment_status: str
    check_in_code: str
    checked_in: bool
    check_in_time: datetime | None = None
    created_at: datetime | None = None


class BookingDetailResponse(BaseModel):
    """Booking with the show it belongs to, for confirmation and history."""

    model_config = ConfigDict(from_attributes=True)

    booking: BookingResponse
    showtime: ShowtimeResponse | None = None
    movie: MovieResponse | None = None
    theater: TheaterResponse | None = None
    screen: ScreenResponse | None = None
    movie_title: str = "Unknown Movie"
    theater_name: str = "Unknown Theater"
    seat_labels: list[str] = Field(default_factory=list)
