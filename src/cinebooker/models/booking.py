"""Booking model for seat reservations against a showtime."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinebooker.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cinebooker.models.user import User

CONFIRMED = "confirmed"
CANCELLED = "cancelled"
REFUNDED = "refunded"

PAYMENT_PENDING = "pending"


class Booking(Base, TimestampMixin):
    """
    Booking model.

    seats is a list of seat ids ("<row>-<seat>"). Only confirmed bookings
    occupy their seats; check_in_code is consumed once at the venue.
    """

    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    showtime_id: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("showtimes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    seats: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    total_amount: Mapped[float] = mapped_column(Float, nullable=False)
    booking_status: Mapped[str] = mapped_column(String(20), nullable=False, default=CONFIRMED, index=True)
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False, default=PAYMENT_PENDING)

    # Check-in
    check_in_code: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    checked_in: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    check_in_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped["User"] = relationship(back_populates="bookings")

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id!r}, showtime_id={self.showtime_id!r}, "
            f"status={self.booking_status!r})>"
        )
