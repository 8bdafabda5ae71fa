"""Seat claim model enforcing one holder per seat per showtime."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from cinebooker.models.base import Base, TimestampMixin


class SeatClaim(Base, TimestampMixin):
    """
    Seat claim model.

    A claim is either a short-lived hold (booking_id is None, expires_at set)
    or belongs to a confirmed booking (booking_id set, expires_at None).
    The unique constraint makes a concurrent second claim fail at flush time.
    """

    __tablename__ = "seat_claims"
    __table_args__ = (
        UniqueConstraint("showtime_id", "seat_id", name="uq_showtime_seat"),
        # Never reuse ids of deleted holds (SQLite would otherwise recycle rowids)
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    showtime_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("showtimes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    seat_id: Mapped[str] = mapped_column(String(20), nullable=False)
    user_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    booking_id: Mapped[str | None] = mapped_column(
        String(100),
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)

    def __repr__(self) -> str:
        return (
            f"<SeatClaim(showtime_id={self.showtime_id!r}, seat_id={self.seat_id!r}, "
            f"booking_id={self.booking_id!r})>"
        )
