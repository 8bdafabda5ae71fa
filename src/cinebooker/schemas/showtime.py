"""Pydantic schemas for showtimes and seat maps."""

from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, Field

from cinebooker.schemas.movie import MovieResponse
from cinebooker.schemas.theater import ScreenResponse, TheaterResponse


class ShowtimeResponse(BaseModel):
    """Showtime response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    movie_id: str
    theater_id: str
    screen_id: str
    show_date: date
    show_time: time
    price_regular: float
    price_gold: float
    price_platinum: float
    available_seats: int
    total_seats: int


class ShowtimeSlot(BaseModel):
    """A showtime enriched with its screen for listing under a theater."""

    showtime: ShowtimeResponse
    screen_name: str
    format: str


class TheaterShowtimesResponse(BaseModel):
    theater_name: str
    theater_location: str
    showtimes: list[ShowtimeSlot]


class ShowtimesForDateResponse(BaseModel):
    """Showtimes of a movie on one date, with the selectable dates."""

    date: date
    dates: list[date]
    theaters: list[TheaterShowtimesResponse]


class SeatRowResponse(BaseModel):
    row: int
    label: str
    seat_class: str
    price: float


class SeatMapResponse(BaseModel):
    """Seat selection state for one showtime."""

    showtime: ShowtimeResponse
    movie: MovieResponse | None = None
    theater: TheaterResponse | None = None
    screen: ScreenResponse
    rows: int
    seats_per_row: int
    row_classes: list[SeatRowResponse]
    occupied: list[str]
    held: list[str]
    max_seats: int


class HoldRequest(BaseModel):
    """Seats to hold while the user completes the booking."""

    seats: list[str] = Field(default_factory=list)


class HoldResponse(BaseModel):
    showtime_id: str
    seats: list[str]
    expires_at: datetime | None = None
