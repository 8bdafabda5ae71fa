"""Screen model: an auditorium inside a theater."""

from typing import TYPE_CHECKING

from sqlalchemy import JSON, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinebooker.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cinebooker.models.theater import Theater


class Screen(Base, TimestampMixin):
    """
    Screen model.

    seat_layout holds the descriptor parsed by cinebooker.services.seat_planner:
    {"rows": 10, "seatsPerRow": 12, "premium": [1, 2], "gold": [3, 4], "regular": [5, ...]}
    """

    __tablename__ = "screens"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    theater_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("theaters.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    format: Mapped[str] = mapped_column(String(50), nullable=False, default="2D")
    seat_layout: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    theater: Mapped["Theater"] = relationship(back_populates="screens")

    def __repr__(self) -> str:
        return f"<Screen(id={self.id!r}, theater_id={self.theater_id!r}, name={self.name!r})>"
