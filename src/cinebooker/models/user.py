"""User model for application accounts resolved from the identity provider."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinebooker.models.base import Base, TimestampMixin
from cinebooker.roles import Role

if TYPE_CHECKING:
    from cinebooker.models.booking import Booking


class User(Base, TimestampMixin):
    """
    Application user.

    The primary key is the identity provider's principal id, so there is at
    most one record per identity. Role changes are made by staff in the admin
    back office, never by the user.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    role: Mapped[str] = mapped_column(String(30), nullable=False, default=Role.CUSTOMER.value)
    theater_id: Mapped[str | None] = mapped_column(
        String(100),
        ForeignKey("theaters.id", ondelete="SET NULL"),
        nullable=True,
    )

    bookings: Mapped[list["Booking"]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, email={self.email!r}, role={self.role!r})>"
