"""Review model for user ratings of movies."""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinebooker.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cinebooker.models.movie import Movie


class Review(Base, TimestampMixin):
    __tablename__ = "reviews"
    __table_args__ = (CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating"),)

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    movie_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    review_text: Mapped[str | None] = mapped_column(Text, nullable=True)

    movie: Mapped["Movie"] = relationship(back_populates="reviews")

    def __repr__(self) -> str:
        return f"<Review(movie_id={self.movie_id!r}, user_id={self.user_id!r}, rating={self.rating})>"
