"""Showtime model for a movie screening at a specific screen."""

from datetime import date, time
from typing import TYPE_CHECKING

from sqlalchemy import Date, Float, ForeignKey, Integer, String, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinebooker.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cinebooker.models.movie import Movie


class Showtime(Base, TimestampMixin):
    """
    Showtime model.

    Prices are per seat class. available_seats/total_seats are informational
    capacity counters and are not decremented by bookings.
    """

    __tablename__ = "showtimes"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)

    # Foreign keys
    movie_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    theater_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("theaters.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    screen_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("screens.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    show_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    show_time: Mapped[time] = mapped_column(Time, nullable=False)

    # Pricing per seat class
    price_regular: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    price_gold: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    price_platinum: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # Capacity counters
    available_seats: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_seats: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    movie: Mapped["Movie"] = relationship(back_populates="showtimes")

    def __repr__(self) -> str:
        return (
            f"<Showtime(id={self.id!r}, "
            f"movie_id={self.movie_id!r}, "
            f"show_date={self.show_date}, show_time={self.show_time})>"
        )
