"""Pydantic schemas for check-in."""

from datetime import date, datetime, time
from typing import Annotated

from pydantic import BaseModel, StringConstraints


class CheckInRequest(BaseModel):
    """Code scanned or typed by the operator; surrounding whitespace is ignored."""

    code: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CheckedInBookingResponse(BaseModel):
    id: str
    movie_title: str
    theater_name: str
    show_date: date
    show_time: time
    seats: list[str]
    user_name: str
    check_in_time: datetime | None = None


class CheckInResponse(BaseModel):
    """Outcome of a check-in attempt; failures are reported here, not as HTTP errors."""

    success: bool
    outcome: str
    message: str
    booking: CheckedInBookingResponse | None = None
