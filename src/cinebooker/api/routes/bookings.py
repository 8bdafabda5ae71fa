"""Booking API endpoints."""

import logging

from fastapi import APIRouter, Depends

from cinebooker.api.deps import get_gateway, require_view
from cinebooker.models import Booking, User
from cinebooker.roles import View
from cinebooker.schemas.booking import BookingCreate, BookingDetailResponse, BookingResponse
from cinebooker.schemas.movie import MovieResponse
from cinebooker.schemas.showtime import ShowtimeResponse
from cinebooker.schemas.theater import ScreenResponse, TheaterResponse
from cinebooker.services.booking_writer import BookingDetails, BookingWriter
from cinebooker.services.gateway import Gateway
from cinebooker.utils.seats import seat_label

logger = logging.getLogger(__name__)
router = APIRouter()


def booking_detail_response(details: BookingDetails) -> BookingDetailResponse:
    """Serialize a booking with its show, falling back to placeholder names."""
    booking = details.booking
    return BookingDetailResponse(
        booking=BookingResponse.model_validate(booking),
        showtime=ShowtimeResponse.model_validate(details.showtime) if details.showtime else None,
        movie=MovieResponse.model_validate(details.movie) if details.movie else None,
        theater=TheaterResponse.model_validate(details.theater) if details.theater else None,
        screen=ScreenResponse.model_validate(details.screen) if details.screen else None,
        movie_title=details.movie.title if details.movie else "Unknown Movie",
        theater_name=details.theater.name if details.theater else "Unknown Theater",
        seat_labels=[seat_label(seat_id) for seat_id in booking.seats or []],
    )


@router.post("/bookings", response_model=BookingResponse, status_code=201)
async def create_booking(
    request: BookingCreate,
    gateway: Gateway = Depends(get_gateway),
    user: User = Depends(require_view(View.SEAT_SELECTION)),
) -> Booking:
    """
    Book the selected seats.

    Answers 422 for an empty, oversized or invalid selection and 409 when a
    seat was booked or held by someone else in the meantime.
    """
    return await BookingWriter(gateway).create_booking(request.showtime_id, request.seats, user)


@router.get("/bookings/{booking_id}", response_model=BookingDetailResponse)
async def get_booking(
    booking_id: str,
    gateway: Gateway = Depends(get_gateway),
    user: User = Depends(require_view(View.BOOKING_CONFIRMATION)),
) -> BookingDetailResponse:
    details = await BookingWriter(gateway).get_details(booking_id, user)
    return booking_detail_response(details)


@router.post("/bookings/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: str,
    gateway: Gateway = Depends(get_gateway),
    user: User = Depends(require_view(View.PROFILE)),
) -> Booking:
    return await BookingWriter(gateway).cancel_booking(booking_id, user)
