"""Tests for seat layout parsing, seat classes and pricing."""

import json
from datetime import date
from types import SimpleNamespace

import pytest

from cinebooker.exceptions import InvalidSeatError, InvalidSeatLayoutError
from cinebooker.services.seat_planner import (
    EnrichedShowtime,
    SeatClass,
    SeatLayout,
    group_by_theater,
    occupied_seats,
    price_for,
    seat_price,
    upcoming_dates,
)

DESCRIPTOR = {"rows": 5, "seatsPerRow": 8, "premium": [5], "gold": [3, 4], "regular": [1, 2]}


def make_showtime(regular: float = 100.0, gold: float = 150.0, platinum: float = 250.0) -> SimpleNamespace:
    return SimpleNamespace(price_regular=regular, price_gold=gold, price_platinum=platinum)


# ---------------------------------------------------------------------------
# SeatLayout.from_descriptor
# ---------------------------------------------------------------------------


class TestFromDescriptor:
    def test_parses_dict(self) -> None:
        layout = SeatLayout.from_descriptor(DESCRIPTOR)
        assert layout.rows == 5
        assert layout.seats_per_row == 8
        assert layout.premium == frozenset({5})
        assert layout.gold == frozenset({3, 4})
        assert layout.capacity == 40

    def test_parses_json_string(self) -> None:
        assert SeatLayout.from_descriptor(json.dumps(DESCRIPTOR)) == SeatLayout.from_descriptor(DESCRIPTOR)

    def test_accepts_snake_case_seats_per_row(self) -> None:
        layout = SeatLayout.from_descriptor({"rows": 2, "seats_per_row": 3})
        assert layout.seats_per_row == 3

    def test_missing_class_lists_default_to_empty(self) -> None:
        layout = SeatLayout.from_descriptor({"rows": 2, "seatsPerRow": 3})
        assert layout.premium == frozenset()
        assert layout.seat_class(1) is SeatClass.REGULAR

    @pytest.mark.parametrize(
        "descriptor",
        [
            None,
            "not json",
            [1, 2],
            {"seatsPerRow": 8},
            {"rows": 5},
            {"rows": 0, "seatsPerRow": 8},
            {"rows": 5, "seatsPerRow": -1},
            {"rows": 5, "seatsPerRow": 8, "gold": [6]},
            {"rows": 5, "seatsPerRow": 8, "premium": ["x"]},
        ],
    )
    def test_rejects_invalid_descriptors(self, descriptor) -> None:
        with pytest.raises(InvalidSeatLayoutError):
            SeatLayout.from_descriptor(descriptor)

    def test_rejects_row_in_two_classes(self) -> None:
        with pytest.raises(InvalidSeatLayoutError, match="more than one class"):
            SeatLayout.from_descriptor({"rows": 5, "seatsPerRow": 8, "premium": [5], "gold": [4, 5]})


# ---------------------------------------------------------------------------
# Seat classes and prices
# ---------------------------------------------------------------------------


class TestSeatClass:
    def test_resolves_each_class(self) -> None:
        layout = SeatLayout.from_descriptor(DESCRIPTOR)
        assert layout.seat_class(5) is SeatClass.PREMIUM
        assert layout.seat_class(3) is SeatClass.GOLD
        assert layout.seat_class(1) is SeatClass.REGULAR

    def test_unlisted_rows_are_regular(self) -> None:
        layout = SeatLayout.from_descriptor({"rows": 5, "seatsPerRow": 8, "premium": [5]})
        assert layout.seat_class(2) is SeatClass.REGULAR


def test_price_for_maps_premium_to_platinum() -> None:
    showtime = make_showtime()
    assert price_for(showtime, SeatClass.PREMIUM) == 250.0
    assert price_for(showtime, SeatClass.GOLD) == 150.0
    assert price_for(showtime, SeatClass.REGULAR) == 100.0


def test_seat_price_uses_row_class() -> None:
    layout = SeatLayout.from_descriptor(DESCRIPTOR)
    assert seat_price(layout, make_showtime(), "5-1") == 250.0
    assert seat_price(layout, make_showtime(), "4-8") == 150.0


class TestValidateSeat:
    def test_accepts_seat_inside_layout(self) -> None:
        layout = SeatLayout.from_descriptor(DESCRIPTOR)
        assert layout.validate_seat("5-8") == (5, 8)
        assert layout.contains("1-1")

    @pytest.mark.parametrize("seat_id", ["6-1", "1-9"])
    def test_rejects_seat_outside_layout(self, seat_id: str) -> None:
        layout = SeatLayout.from_descriptor(DESCRIPTOR)
        assert not layout.contains(seat_id)
        with pytest.raises(InvalidSeatError):
            layout.validate_seat(seat_id)

    def test_seat_ids_cover_whole_layout(self) -> None:
        layout = SeatLayout.from_descriptor({"rows": 2, "seatsPerRow": 2})
        assert layout.seat_ids() == ["1-1", "1-2", "2-1", "2-2"]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def test_upcoming_dates_spans_a_week() -> None:
    dates = upcoming_dates(date(2026, 12, 29))
    assert len(dates) == 7
    assert dates[0] == date(2026, 12, 29)
    assert dates[-1] == date(2027, 1, 4)


def test_occupied_seats_counts_only_confirmed_bookings() -> None:
    bookings = [
        SimpleNamespace(booking_status="confirmed", seats=["1-1", "1-2"]),
        SimpleNamespace(booking_status="cancelled", seats=["2-1"]),
        SimpleNamespace(booking_status="refunded", seats=["2-2"]),
        SimpleNamespace(booking_status="confirmed", seats='["3-3"]'),
    ]
    assert occupied_seats(bookings) == {"1-1", "1-2", "3-3"}


def test_group_by_theater_keeps_first_seen_order() -> None:
    def slot(name: str, location: str) -> EnrichedShowtime:
        return EnrichedShowtime(
            showtime=SimpleNamespace(),
            theater_name=name,
            theater_location=location,
            screen_name="Screen 1",
            format="2D",
        )

    groups = group_by_theater([slot("B", "x"), slot("A", "y"), slot("B", "x"), slot("B", "z")])
    assert [(g.theater_name, g.theater_location, len(g.showtimes)) for g in groups] == [
        ("B", "x", 2),
        ("A", "y", 1),
        ("B", "z", 1),
    ]
