"""Showtime listing and seat-map planning for a movie."""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import StrEnum
from typing import Any

from cinebooker.exceptions import InvalidSeatError, InvalidSeatLayoutError
from cinebooker.models import Movie, Screen, Showtime, Theater
from cinebooker.models.base import as_utc, utcnow
from cinebooker.models.booking import CONFIRMED
from cinebooker.services.gateway import Gateway
from cinebooker.utils.seats import format_seat_id, parse_seat_id, row_letter, sort_seat_ids

logger = logging.getLogger(__name__)

BOOKING_WINDOW_DAYS = 7


class SeatClass(StrEnum):
    PREMIUM = "premium"
    GOLD = "gold"
    REGULAR = "regular"


@dataclass(frozen=True)
class SeatLayout:
    """
    Parsed seat-layout descriptor of a screen.

    Rows and seats are 1-based. Each row belongs to at most one of the
    premium/gold/regular lists; rows in none of them are regular.
    """

    rows: int
    seats_per_row: int
    premium: frozenset[int] = frozenset()
    gold: frozenset[int] = frozenset()
    regular: frozenset[int] = frozenset()

    @classmethod
    def from_descriptor(cls, descriptor: dict[str, Any] | str | None) -> "SeatLayout":
        """
        Parse and validate a descriptor.

        Accepts the stored JSON object or its serialized string form:
        {"rows": 10, "seatsPerRow": 12, "premium": [1, 2], "gold": [3], "regular": [4, 5]}

        Raises:
            InvalidSeatLayoutError: Missing sizes, rows out of range, or a row in two classes
        """
        if descriptor is None:
            raise InvalidSeatLayoutError("Screen has no seat layout")
        if isinstance(descriptor, str):
            try:
                descriptor = json.loads(descriptor)
            except json.JSONDecodeError as e:
                raise InvalidSeatLayoutError(f"Seat layout is not valid JSON: {e}") from e
        if not isinstance(descriptor, dict):
            raise InvalidSeatLayoutError("Seat layout must be an object")

        try:
            rows = int(descriptor["rows"])
            seats_per_row = int(descriptor.get("seatsPerRow", descriptor.get("seats_per_row")))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidSeatLayoutError("Seat layout needs integer rows and seatsPerRow") from e
        if rows < 1 or seats_per_row < 1:
            raise InvalidSeatLayoutError("Seat layout sizes must be positive")

        classes: dict[str, frozenset[int]] = {}
        for name in ("premium", "gold", "regular"):
            try:
                members = frozenset(int(row) for row in descriptor.get(name) or [])
            except (TypeError, ValueError) as e:
                raise InvalidSeatLayoutError(f"Seat layout {name} rows must be integers") from e
            out_of_range = [row for row in members if not 1 <= row <= rows]
            if out_of_range:
                raise InvalidSeatLayoutError(f"Seat layout {name} rows out of range: {sorted(out_of_range)}")
            classes[name] = members

        overlap = (
            (classes["premium"] & classes["gold"])
            | (classes["premium"] & classes["regular"])
            | (classes["gold"] & classes["regular"])
        )
        if overlap:
            raise InvalidSeatLayoutError(f"Rows assigned to more than one class: {sorted(overlap)}")

        return cls(rows=rows, seats_per_row=seats_per_row, **classes)

    def seat_class(self, row: int) -> SeatClass:
        if row in self.premium:
            return SeatClass.PREMIUM
        if row in self.gold:
            return SeatClass.GOLD
        return SeatClass.REGULAR

    def contains(self, seat_id: str) -> bool:
        row, seat = parse_seat_id(seat_id)
        return row <= self.rows and seat <= self.seats_per_row

    def validate_seat(self, seat_id: str) -> tuple[int, int]:
        row, seat = parse_seat_id(seat_id)
        if row > self.rows or seat > self.seats_per_row:
            raise InvalidSeatError(f"Seat {seat_id} is outside the screen layout")
        return row, seat

    def seat_ids(self) -> list[str]:
        return [
            format_seat_id(row, seat)
            for row in range(1, self.rows + 1)
            for seat in range(1, self.seats_per_row + 1)
        ]

    @property
    def capacity(self) -> int:
        return self.rows * self.seats_per_row


def price_for(showtime: Showtime, seat_class: SeatClass) -> float:
    """Look up the showtime's price for a seat class."""
    if seat_class is SeatClass.PREMIUM:
        return showtime.price_platinum
    if seat_class is SeatClass.GOLD:
        return showtime.price_gold
    return showtime.price_regular


def seat_price(layout: SeatLayout, showtime: Showtime, seat_id: str) -> float:
    row, _ = parse_seat_id(seat_id)
    return price_for(showtime, layout.seat_class(row))


def upcoming_dates(start: date, days: int = BOOKING_WINDOW_DAYS) -> list[date]:
    """The selectable show dates, starting today."""
    return [start + timedelta(days=offset) for offset in range(days)]


def occupied_seats(bookings: Iterable[Any]) -> set[str]:
    """Union of seat lists of confirmed bookings."""
    occupied: set[str] = set()
    for booking in bookings:
        if booking.booking_status != CONFIRMED:
            continue
        seats = booking.seats
        if isinstance(seats, str):
            seats = json.loads(seats)
        occupied.update(seats or [])
    return occupied


@dataclass
class EnrichedShowtime:
    showtime: Showtime
    theater_name: str
    theater_location: str
    screen_name: str
    format: str


@dataclass
class TheaterShowtimes:
    theater_name: str
    theater_location: str
    showtimes: list[EnrichedShowtime] = field(default_factory=list)


@dataclass
class RowInfo:
    row: int
    label: str
    seat_class: SeatClass
    price: float


@dataclass
class SeatMap:
    showtime: Showtime
    movie: Movie | None
    theater: Theater | None
    screen: Screen
    layout: SeatLayout
    occupied: list[str]
    held: list[str]
    rows: list[RowInfo]


def group_by_theater(showtimes: Iterable[EnrichedShowtime]) -> list[TheaterShowtimes]:
    """Group enriched showtimes by (theater name, location), keeping first-seen order."""
    groups: dict[tuple[str, str], TheaterShowtimes] = {}
    for item in showtimes:
        key = (item.theater_name, item.theater_location)
        if key not in groups:
            groups[key] = TheaterShowtimes(theater_name=key[0], theater_location=key[1])
        groups[key].showtimes.append(item)
    return list(groups.values())


class SeatPlanner:
    """Showtime and seat-map queries for the booking flow."""

    def __init__(self, gateway: Gateway) -> None:
        self.gateway = gateway

    async def list_showtimes_for_date(self, movie_id: str, show_date: date) -> list[TheaterShowtimes]:
        """
        Showtimes of a movie on one date, grouped by theater.

        Args:
            movie_id: Movie id
            show_date: Date to list

        Returns:
            Groups of showtimes per theater, each ordered by show time
        """
        showtimes = await self.gateway.showtimes.list(
            where={"movie_id": movie_id, "show_date": show_date},
            order_by={"show_time": "asc"},
        )

        theaters: dict[str, Theater | None] = {}
        screens: dict[str, Screen | None] = {}
        enriched: list[EnrichedShowtime] = []
        for showtime in showtimes:
            if showtime.theater_id not in theaters:
                theaters[showtime.theater_id] = await self.gateway.theaters.first({"id": showtime.theater_id})
            if showtime.screen_id not in screens:
                screens[showtime.screen_id] = await self.gateway.screens.first({"id": showtime.screen_id})
            theater = theaters[showtime.theater_id]
            screen = screens[showtime.screen_id]

            enriched.append(
                EnrichedShowtime(
                    showtime=showtime,
                    theater_name=theater.name if theater else "Unknown Theater",
                    theater_location=theater.location if theater else "Unknown Location",
                    screen_name=screen.name if screen else "Unknown Screen",
                    format=screen.format if screen else "2D",
                )
            )

        return group_by_theater(enriched)

    async def load_layout(self, showtime: Showtime) -> tuple[Screen, SeatLayout]:
        screen = await self.gateway.screens.get(showtime.screen_id)
        return screen, SeatLayout.from_descriptor(screen.seat_layout)

    async def occupied_seats(self, showtime_id: str) -> set[str]:
        """Seats claimed by confirmed bookings for a showtime."""
        bookings = await self.gateway.bookings.list(
            where={"showtime_id": showtime_id, "booking_status": CONFIRMED},
        )
        return occupied_seats(bookings)

    async def held_seats(self, showtime_id: str, exclude_user_id: str | None = None) -> set[str]:
        """Seats under an unexpired hold, optionally ignoring one user's holds."""
        now = utcnow()
        claims = await self.gateway.seat_claims.list(
            where={"showtime_id": showtime_id, "booking_id": None},
        )
        return {
            claim.seat_id
            for claim in claims
            if claim.expires_at is not None
            and as_utc(claim.expires_at) > now
            and claim.user_id != exclude_user_id
        }

    async def load_seat_map(self, showtime_id: str, viewer_id: str | None = None) -> SeatMap:
        """
        Everything needed to render seat selection for one showtime.

        Occupancy is read at call time only; the booking writer re-checks it
        when the booking is created.
        """
        showtime = await self.gateway.showtimes.get(showtime_id)
        movie = await self.gateway.movies.first({"id": showtime.movie_id})
        theater = await self.gateway.theaters.first({"id": showtime.theater_id})
        screen, layout = await self.load_layout(showtime)

        occupied = await self.occupied_seats(showtime_id)
        held = await self.held_seats(showtime_id, exclude_user_id=viewer_id) - occupied

        rows = [
            RowInfo(
                row=row,
                label=row_letter(row),
                seat_class=layout.seat_class(row),
                price=price_for(showtime, layout.seat_class(row)),
            )
            for row in range(1, layout.rows + 1)
        ]

        return SeatMap(
            showtime=showtime,
            movie=movie,
            theater=theater,
            screen=screen,
            layout=layout,
            occupied=sort_seat_ids(occupied),
            held=sort_seat_ids(held),
            rows=rows,
        )
