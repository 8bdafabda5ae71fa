"""Role-gated dashboard counters and theater approval."""

import logging
from dataclasses import dataclass
from datetime import date

from cinebooker.exceptions import StateConflictError
from cinebooker.models import Booking, Showtime, Theater, User
from cinebooker.models.base import as_utc, utcnow
from cinebooker.models.booking import CONFIRMED
from cinebooker.models.theater import APPROVED, PENDING, REJECTED
from cinebooker.services.gateway import Gateway
from cinebooker.services.seat_planner import occupied_seats

logger = logging.getLogger(__name__)

REVIEW_DECISIONS = frozenset({APPROVED, REJECTED})


@dataclass
class TheaterStats:
    theater: Theater | None
    total_bookings: int = 0
    today_revenue: float = 0.0
    occupancy_rate: float = 0.0
    upcoming_shows: int = 0


@dataclass
class PlatformStats:
    total_theaters: int
    total_movies: int
    total_users: int
    total_revenue: float
    pending_theaters: list[Theater]


def occupancy_rate(showtimes: list[Showtime], bookings: list[Booking]) -> float:
    """Booked seats as a percentage of total capacity, one decimal place."""
    capacity = sum(showtime.total_seats or 0 for showtime in showtimes)
    if capacity <= 0:
        return 0.0
    booked = len(occupied_seats_by_showtime(bookings))
    return round(100.0 * booked / capacity, 1)


def occupied_seats_by_showtime(bookings: list[Booking]) -> set[tuple[str, str]]:
    pairs: set[tuple[str, str]] = set()
    for booking in bookings:
        pairs.update((booking.showtime_id, seat) for seat in occupied_seats([booking]))
    return pairs


class DashboardService:
    """
    Aggregates for the theater and platform dashboards.

    Counters are computed in memory from gateway listings, which is adequate
    for a single-venue or small catalog.
    """

    def __init__(self, gateway: Gateway) -> None:
        self.gateway = gateway

    async def theater_stats(self, user: User, today: date | None = None) -> TheaterStats:
        today = today or utcnow().date()
        if not user.theater_id:
            logger.warning(f"Theater admin {user.id} has no theater affiliation")
            return TheaterStats(theater=None)

        theater = await self.gateway.theaters.get(user.theater_id)
        showtimes = await self.gateway.showtimes.list(where={"theater_id": theater.id})

        bookings: list[Booking] = []
        for showtime in showtimes:
            bookings.extend(
                await self.gateway.bookings.list(
                    where={"showtime_id": showtime.id, "booking_status": CONFIRMED},
                )
            )

        upcoming = [showtime for showtime in showtimes if showtime.show_date >= today]
        upcoming_ids = {showtime.id for showtime in upcoming}
        today_revenue = sum(
            booking.total_amount
            for booking in bookings
            if booking.created_at and as_utc(booking.created_at).date() == today
        )

        return TheaterStats(
            theater=theater,
            total_bookings=len(bookings),
            today_revenue=today_revenue,
            occupancy_rate=occupancy_rate(
                upcoming, [booking for booking in bookings if booking.showtime_id in upcoming_ids]
            ),
            upcoming_shows=len(upcoming),
        )

    async def pending_theaters(self) -> list[Theater]:
        return await self.gateway.theaters.list(
            where={"status": PENDING},
            order_by={"created_at": "desc"},
        )

    async def platform_stats(self) -> PlatformStats:
        bookings = await self.gateway.bookings.list(where={"booking_status": CONFIRMED})
        return PlatformStats(
            total_theaters=await self.gateway.theaters.count({"status": APPROVED}),
            total_movies=await self.gateway.movies.count(),
            total_users=await self.gateway.users.count(),
            total_revenue=sum(booking.total_amount for booking in bookings),
            pending_theaters=await self.pending_theaters(),
        )

    async def set_theater_status(self, theater_id: str, status: str, reviewer: User) -> Theater:
        """
        Approve or reject a theater.

        Raises:
            ValueError: status is not approved/rejected
            StateConflictError: the theater has already been reviewed
        """
        if status not in REVIEW_DECISIONS:
            raise ValueError(f"Unsupported theater status: {status}")

        theater = await self.gateway.theaters.get(theater_id)
        if theater.status != PENDING:
            raise StateConflictError(f"Theater {theater_id} is already {theater.status}")

        theater = await self.gateway.theaters.update(theater_id, {"status": status})
        logger.info(f"Platform owner {reviewer.id} set theater {theater_id} to {status}")
        return theater
