"""SQLAlchemy ORM models."""

from cinebooker.models.base import Base
from cinebooker.models.booking import Booking
from cinebooker.models.movie import Movie
from cinebooker.models.review import Review
from cinebooker.models.screen import Screen
from cinebooker.models.seat_claim import SeatClaim
from cinebooker.models.showtime import Showtime
from cinebooker.models.theater import Theater
from cinebooker.models.user import User

__all__ = [
    "Base",
    "Booking",
    "Movie",
    "Review",
    "Screen",
    "SeatClaim",
    "Showtime",
    "Theater",
    "User",
]
