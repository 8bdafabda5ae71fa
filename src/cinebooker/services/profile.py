"""User profile: own bookings and editable contact details."""

import logging

from cinebooker.models import User
from cinebooker.services.booking_writer import BookingDetails, BookingWriter
from cinebooker.services.gateway import Gateway

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, gateway: Gateway) -> None:
        self.gateway = gateway

    async def list_bookings(self, user: User) -> list[BookingDetails]:
        return await BookingWriter(self.gateway).list_user_bookings(user)

    async def update(self, user: User, name: str | None = None, phone: str | None = None) -> User:
        """
        Update name and/or phone. None leaves a field unchanged; an empty
        phone clears it.
        """
        partial: dict[str, str | None] = {}
        if name is not None:
            partial["name"] = name
        if phone is not None:
            partial["phone"] = phone or None
        if not partial:
            return user

        logger.info(f"Updating profile of {user.id}: {sorted(partial)}")
        return await self.gateway.users.update(user.id, partial)
