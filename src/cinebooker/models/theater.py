"""Theater model for venues listed on the platform."""

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cinebooker.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from cinebooker.models.screen import Screen

PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"


class Theater(Base, TimestampMixin):
    """
    Theater venue model.

    New venues start as pending and only appear in the catalog once a
    platform owner approves them.
    """

    __tablename__ = "theaters"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=PENDING, index=True)

    screens: Mapped[list["Screen"]] = relationship(
        back_populates="theater",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Theater(id={self.id!r}, name={self.name!r}, status={self.status!r})>"
