"""Check-in verification of booking codes presented at the venue."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import StrEnum

from cinebooker.exceptions import GatewayError
from cinebooker.models.base import utcnow
from cinebooker.models.booking import CONFIRMED
from cinebooker.services.gateway import Gateway

logger = logging.getLogger(__name__)


class CheckInOutcome(StrEnum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ALREADY_USED = "already_used"
    NOT_CONFIRMED = "not_confirmed"
    SHOWTIME_NOT_FOUND = "showtime_not_found"
    ERROR = "error"


MESSAGES: dict[CheckInOutcome, str] = {
    CheckInOutcome.SUCCESS: "Check-in successful!",
    CheckInOutcome.NOT_FOUND: "Invalid QR code. Booking not found.",
    CheckInOutcome.ALREADY_USED: "This ticket has already been used for check-in.",
    CheckInOutcome.NOT_CONFIRMED: "This booking is not confirmed.",
    CheckInOutcome.SHOWTIME_NOT_FOUND: "Showtime not found.",
    CheckInOutcome.ERROR: "An error occurred during check-in. Please try again.",
}


@dataclass
class CheckedInBooking:
    id: str
    movie_title: str
    theater_name: str
    show_date: date
    show_time: time
    seats: list[str] = field(default_factory=list)
    user_name: str = "Unknown User"
    check_in_time: datetime | None = None


@dataclass
class CheckInResult:
    outcome: CheckInOutcome
    booking: CheckedInBooking | None = None

    @property
    def success(self) -> bool:
        return self.outcome is CheckInOutcome.SUCCESS

    @property
    def message(self) -> str:
        return MESSAGES[self.outcome]


class CheckInVerifier:
    """
    Consumes a booking's check-in code exactly once.

    Every outcome, including gateway failures, is returned as a result value;
    a successful check-in cannot be undone here.
    """

    def __init__(self, gateway: Gateway) -> None:
        self.gateway = gateway

    async def check_in(self, code: str) -> CheckInResult:
        try:
            return await self._check_in(code.strip())
        except GatewayError as e:
            logger.error(f"Error during check-in: {e}")
            # Nothing from a failed attempt may be committed with the request
            await self.gateway.db.rollback()
            return CheckInResult(CheckInOutcome.ERROR)

    async def _check_in(self, code: str) -> CheckInResult:
        booking = await self.gateway.bookings.first({"check_in_code": code})
        if booking is None:
            logger.info("Check-in rejected: unknown code")
            return CheckInResult(CheckInOutcome.NOT_FOUND)

        if booking.checked_in:
            logger.info(f"Check-in rejected: booking {booking.id} already used")
            return CheckInResult(CheckInOutcome.ALREADY_USED)

        if booking.booking_status != CONFIRMED:
            logger.info(f"Check-in rejected: booking {booking.id} is {booking.booking_status}")
            return CheckInResult(CheckInOutcome.NOT_CONFIRMED)

        showtime = await self.gateway.showtimes.first({"id": booking.showtime_id})
        if showtime is None:
            return CheckInResult(CheckInOutcome.SHOWTIME_NOT_FOUND)

        user = await self.gateway.users.first({"id": booking.user_id})
        movie = await self.gateway.movies.first({"id": showtime.movie_id})
        theater = await self.gateway.theaters.first({"id": showtime.theater_id})

        # Conditional update so two operators scanning the same code cannot both succeed
        checked_in_at = utcnow()
        updated = await self.gateway.bookings.update_if(
            booking.id,
            expected={"checked_in": False, "booking_status": CONFIRMED},
            partial={"checked_in": True, "check_in_time": checked_in_at},
        )
        if not updated:
            logger.info(f"Check-in rejected: booking {booking.id} used concurrently")
            return CheckInResult(CheckInOutcome.ALREADY_USED)
        logger.info(f"Checked in booking {booking.id}")

        return CheckInResult(
            CheckInOutcome.SUCCESS,
            booking=CheckedInBooking(
                id=booking.id,
                movie_title=movie.title if movie else "Unknown Movie",
                theater_name=theater.name if theater else "Unknown Theater",
                show_date=showtime.show_date,
                show_time=showtime.show_time,
                seats=list(booking.seats or []),
                user_name=user.name if user else "Unknown User",
                check_in_time=checked_in_at,
            ),
        )
