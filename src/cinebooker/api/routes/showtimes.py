"""Seat map and seat hold endpoints."""

from fastapi import APIRouter, Depends

from cinebooker.api.deps import get_gateway, require_view
from cinebooker.config import settings
from cinebooker.models import User
from cinebooker.roles import View
from cinebooker.schemas.movie import MovieResponse
from cinebooker.schemas.showtime import (
    HoldRequest,
    HoldResponse,
    SeatMapResponse,
    SeatRowResponse,
    ShowtimeResponse,
)
from cinebooker.schemas.theater import ScreenResponse, TheaterResponse
from cinebooker.services.booking_writer import BookingWriter
from cinebooker.services.gateway import Gateway
from cinebooker.services.seat_planner import SeatPlanner
from cinebooker.utils.seats import sort_seat_ids

router = APIRouter()


@router.get("/showtimes/{showtime_id}/seats", response_model=SeatMapResponse)
async def get_seat_map(
    showtime_id: str,
    gateway: Gateway = Depends(get_gateway),
    user: User = Depends(require_view(View.SEAT_SELECTION)),
) -> SeatMapResponse:
    """
    Seat selection state for a showtime.

    Occupied seats come from confirmed bookings; held seats are other users'
    unexpired holds. Both are a snapshot and are re-checked on booking.
    """
    seat_map = await SeatPlanner(gateway).load_seat_map(showtime_id, viewer_id=user.id)
    return SeatMapResponse(
        showtime=ShowtimeResponse.model_validate(seat_map.showtime),
        movie=MovieResponse.model_validate(seat_map.movie) if seat_map.movie else None,
        theater=TheaterResponse.model_validate(seat_map.theater) if seat_map.theater else None,
        screen=ScreenResponse.model_validate(seat_map.screen),
        rows=seat_map.layout.rows,
        seats_per_row=seat_map.layout.seats_per_row,
        row_classes=[
            SeatRowResponse(row=row.row, label=row.label, seat_class=row.seat_class.value, price=row.price)
            for row in seat_map.rows
        ],
        occupied=seat_map.occupied,
        held=seat_map.held,
        max_seats=settings.max_seats_per_booking,
    )


@router.post("/showtimes/{showtime_id}/holds", response_model=HoldResponse)
async def hold_seats(
    showtime_id: str,
    request: HoldRequest,
    gateway: Gateway = Depends(get_gateway),
    user: User = Depends(require_view(View.SEAT_SELECTION)),
) -> HoldResponse:
    """Hold seats while the user completes the booking, replacing previous holds."""
    claims = await BookingWriter(gateway).hold_seats(showtime_id, request.seats, user)
    return HoldResponse(
        showtime_id=showtime_id,
        seats=sort_seat_ids([claim.seat_id for claim in claims]),
        expires_at=claims[0].expires_at if claims else None,
    )


@router.delete("/showtimes/{showtime_id}/holds", status_code=204)
async def release_holds(
    showtime_id: str,
    gateway: Gateway = Depends(get_gateway),
    user: User = Depends(require_view(View.SEAT_SELECTION)),
) -> None:
    await BookingWriter(gateway).release_holds(showtime_id, user)
