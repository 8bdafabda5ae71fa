"""Movie model for catalog entries."""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Date, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinebooker.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cinebooker.models.review import Review
    from cinebooker.models.showtime import Showtime

NOW_SHOWING = "now_showing"
COMING_SOON = "coming_soon"


class Movie(Base, TimestampMixin):
    """
    Movie model.

    Read-only from the booking flow; maintained through the admin back office.
    """

    __tablename__ = "movies"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    poster_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    trailer_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    language: Mapped[str | None] = mapped_column(String(50), nullable=True)
    genre: Mapped[str | None] = mapped_column(String(100), nullable=True)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=NOW_SHOWING, index=True)

    # Free-form cast/crew blob, e.g. {"cast": [...], "director": "..."}
    cast_crew: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    showtimes: Mapped[list["Showtime"]] = relationship(back_populates="movie")
    reviews: Mapped[list["Review"]] = relationship(back_populates="movie")

    def __repr__(self) -> str:
        return f"<Movie(id={self.id!r}, title={self.title!r}, status={self.status!r})>"
