"""Booking creation, seat holds, cancellation and booking lookups."""

import logging
import secrets
import uuid
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from cinebooker.config import settings
from cinebooker.exceptions import (
    BookingStateError,
    EmptySelectionError,
    GatewayError,
    InvalidSeatError,
    NotFoundError,
    SeatUnavailableError,
    SelectionTooLargeError,
)
from cinebooker.models import Booking, Movie, Screen, SeatClaim, Showtime, Theater, User
from cinebooker.models.base import utcnow
from cinebooker.models.booking import CANCELLED, CONFIRMED, PAYMENT_PENDING
from cinebooker.roles import STAFF_ROLES, parse_role
from cinebooker.services.gateway import Gateway
from cinebooker.services.seat_planner import SeatLayout, SeatPlanner, seat_price
from cinebooker.utils.seats import format_seat_id

logger = logging.getLogger(__name__)


def new_booking_id() -> str:
    return f"booking_{uuid.uuid4().hex}"


def new_check_in_code() -> str:
    return f"QR_{secrets.token_urlsafe(16)}"


def validate_selection(seats: list[str], layout: SeatLayout, limit: int | None = None) -> list[str]:
    """
    Check a seat selection against the booking policy and the screen layout.

    Args:
        seats: Selected seat ids
        layout: Screen layout the seats must fall within
        limit: Maximum seats per booking (defaults to settings)

    Returns:
        The selection in canonical "<row>-<seat>" form, sorted by row and seat

    Raises:
        EmptySelectionError: No seats selected
        SelectionTooLargeError: More seats than the limit
        InvalidSeatError: Malformed, duplicated or out-of-layout seat ids
    """
    limit = settings.max_seats_per_booking if limit is None else limit
    if not seats:
        raise EmptySelectionError()
    if len(seats) > limit:
        raise SelectionTooLargeError(limit)
    # "01-2" and " 1-2" name the same seat as "1-2"
    positions = [layout.validate_seat(seat_id) for seat_id in seats]
    if len(set(positions)) != len(positions):
        raise InvalidSeatError("Each seat can only be selected once")
    return [format_seat_id(row, seat) for row, seat in sorted(positions)]


def calculate_total(layout: SeatLayout, showtime: Showtime, seats: list[str]) -> float:
    """Sum of each seat's class price."""
    return sum(seat_price(layout, showtime, seat_id) for seat_id in seats)


@dataclass
class BookingDetails:
    booking: Booking
    showtime: Showtime | None
    movie: Movie | None
    theater: Theater | None
    screen: Screen | None


class BookingWriter:
    """
    Creates and mutates bookings.

    With settings.enforce_seat_uniqueness enabled, every booked seat gets a
    SeatClaim row; the (showtime, seat) unique constraint rejects a second
    claim even when two requests pass the occupancy check at the same time.
    """

    def __init__(self, gateway: Gateway, enforce_seat_uniqueness: bool | None = None) -> None:
        self.gateway = gateway
        self.planner = SeatPlanner(gateway)
        self.enforce_seat_uniqueness = (
            settings.enforce_seat_uniqueness if enforce_seat_uniqueness is None else enforce_seat_uniqueness
        )

    async def create_booking(self, showtime_id: str, seats: list[str], user: User) -> Booking:
        """
        Persist a confirmed booking for the selected seats.

        Args:
            showtime_id: Showtime being booked
            seats: Selected seat ids
            user: Signed-in user making the booking

        Returns:
            The new booking (payment pending)

        Raises:
            SeatUnavailableError: A seat is already booked or held by someone else
        """
        showtime = await self.gateway.showtimes.get(showtime_id)
        _, layout = await self.planner.load_layout(showtime)
        seats = validate_selection(seats, layout)
        total = calculate_total(layout, showtime, seats)

        if not self.enforce_seat_uniqueness:
            booking = await self._insert_booking(showtime_id, seats, total, user)
            logger.info(f"Created booking {booking.id} for {len(seats)} seats (unchecked)")
            return booking

        occupied = await self.planner.occupied_seats(showtime_id)
        held = await self.planner.held_seats(showtime_id, exclude_user_id=user.id)
        taken = (occupied | held) & set(seats)
        if taken:
            raise SeatUnavailableError(list(taken))

        await self._delete_expired_holds(showtime_id)
        try:
            async with self.gateway.db.begin_nested():
                booking = await self._insert_booking(showtime_id, seats, total, user)
                await self._claim_seats(showtime_id, seats, user, booking.id)
                await self._delete_holds(showtime_id, user.id)
        except IntegrityError as e:
            logger.warning(f"Seat claim conflict on showtime {showtime_id}: {e}")
            raise SeatUnavailableError(seats) from e

        logger.info(
            f"Created booking {booking.id} for user {user.id}: "
            f"{len(seats)} seats on showtime {showtime_id}, total {total}"
        )
        return booking

    async def _insert_booking(self, showtime_id: str, seats: list[str], total: float, user: User) -> Booking:
        return await self.gateway.bookings.create(
            id=new_booking_id(),
            user_id=user.id,
            showtime_id=showtime_id,
            seats=seats,
            total_amount=total,
            booking_status=CONFIRMED,
            payment_status=PAYMENT_PENDING,
            check_in_code=new_check_in_code(),
            checked_in=False,
        )

    async def _claim_seats(self, showtime_id: str, seats: list[str], user: User, booking_id: str) -> None:
        """Convert the user's own holds into booking claims and claim the rest."""
        claims = await self.gateway.seat_claims.list(where={"showtime_id": showtime_id, "user_id": user.id})
        own_holds = {claim.seat_id: claim for claim in claims if claim.booking_id is None}

        for seat_id in seats:
            hold = own_holds.get(seat_id)
            if hold is not None:
                await self.gateway.seat_claims.update(hold.id, {"booking_id": booking_id, "expires_at": None})
            else:
                await self.gateway.seat_claims.create(
                    showtime_id=showtime_id,
                    seat_id=seat_id,
                    user_id=user.id,
                    booking_id=booking_id,
                )

    async def _delete_expired_holds(self, showtime_id: str) -> None:
        stmt = delete(SeatClaim).where(
            SeatClaim.showtime_id == showtime_id,
            SeatClaim.booking_id.is_(None),
            SeatClaim.expires_at <= utcnow(),
        ).execution_options(synchronize_session=False)
        try:
            await self.gateway.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Failed to release expired holds for {showtime_id}: {e}", exc_info=True)
            raise GatewayError("Failed to release expired holds") from e

    async def hold_seats(self, showtime_id: str, seats: list[str], user: User) -> list[SeatClaim]:
        """
        Hold seats for the user for settings.seat_hold_minutes.

        Replaces any previous holds of the same user on this showtime.
        """
        showtime = await self.gateway.showtimes.get(showtime_id)
        _, layout = await self.planner.load_layout(showtime)
        seats = validate_selection(seats, layout)

        occupied = await self.planner.occupied_seats(showtime_id)
        taken = occupied & set(seats)
        if taken:
            raise SeatUnavailableError(list(taken))

        await self._delete_expired_holds(showtime_id)
        expires_at = utcnow() + timedelta(minutes=settings.seat_hold_minutes)
        try:
            async with self.gateway.db.begin_nested():
                await self._delete_holds(showtime_id, user.id)
                claims = [
                    await self.gateway.seat_claims.create(
                        showtime_id=showtime_id,
                        seat_id=seat_id,
                        user_id=user.id,
                        expires_at=expires_at,
                    )
                    for seat_id in seats
                ]
        except IntegrityError as e:
            logger.info(f"Hold conflict on showtime {showtime_id} for user {user.id}")
            raise SeatUnavailableError(seats) from e

        logger.info(f"User {user.id} holds {len(claims)} seats on showtime {showtime_id} until {expires_at}")
        return claims

    async def release_holds(self, showtime_id: str, user: User) -> None:
        await self._delete_holds(showtime_id, user.id)

    async def _delete_holds(self, showtime_id: str, user_id: str) -> None:
        stmt = delete(SeatClaim).where(
            SeatClaim.showtime_id == showtime_id,
            SeatClaim.user_id == user_id,
            SeatClaim.booking_id.is_(None),
        ).execution_options(synchronize_session=False)
        try:
            await self.gateway.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Failed to release holds for {user_id} on {showtime_id}: {e}", exc_info=True)
            raise GatewayError("Failed to release holds") from e

    async def cancel_booking(self, booking_id: str, user: User) -> Booking:
        """
        Cancel the user's own confirmed booking and free its seats.

        Raises:
            NotFoundError: No such booking for this user
            BookingStateError: Already checked in or not confirmed
        """
        booking = await self.gateway.bookings.first({"id": booking_id, "user_id": user.id})
        if booking is None:
            raise NotFoundError("bookings", booking_id)
        if booking.checked_in:
            raise BookingStateError("A checked-in booking cannot be cancelled")
        if booking.booking_status != CONFIRMED:
            raise BookingStateError(f"Booking is already {booking.booking_status}")

        booking = await self.gateway.bookings.update(booking_id, {"booking_status": CANCELLED})
        stmt = (
            delete(SeatClaim)
            .where(SeatClaim.booking_id == booking_id)
            .execution_options(synchronize_session=False)
        )
        try:
            await self.gateway.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Failed to free seats of booking {booking_id}: {e}", exc_info=True)
            raise GatewayError("Failed to free seats") from e

        logger.info(f"User {user.id} cancelled booking {booking_id}")
        return booking

    async def get_details(self, booking_id: str, viewer: User) -> BookingDetails:
        """
        Booking confirmation view.

        Owners see their own bookings; staff roles see any booking. Anyone else
        gets NotFoundError so booking ids are not disclosed.
        """
        booking = await self.gateway.bookings.first({"id": booking_id})
        if booking is None or (booking.user_id != viewer.id and parse_role(viewer.role) not in STAFF_ROLES):
            raise NotFoundError("bookings", booking_id)

        showtime = await self.gateway.showtimes.first({"id": booking.showtime_id})
        movie = theater = screen = None
        if showtime:
            movie = await self.gateway.movies.first({"id": showtime.movie_id})
            theater = await self.gateway.theaters.first({"id": showtime.theater_id})
            screen = await self.gateway.screens.first({"id": showtime.screen_id})

        return BookingDetails(booking=booking, showtime=showtime, movie=movie, theater=theater, screen=screen)

    async def list_user_bookings(self, user: User) -> list[BookingDetails]:
        """The user's bookings, newest first, with show details attached."""
        bookings = await self.gateway.bookings.list(
            where={"user_id": user.id},
            order_by={"created_at": "desc"},
        )

        results: list[BookingDetails] = []
        for booking in bookings:
            showtime = await self.gateway.showtimes.first({"id": booking.showtime_id})
            movie = theater = None
            if showtime:
                movie = await self.gateway.movies.first({"id": showtime.movie_id})
                theater = await self.gateway.theaters.first({"id": showtime.theater_id})
            results.append(
                BookingDetails(booking=booking, showtime=showtime, movie=movie, theater=theater, screen=None)
            )
        return results
