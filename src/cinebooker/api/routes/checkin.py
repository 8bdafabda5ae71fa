"""Check-in API endpoint."""

from fastapi import APIRouter, Depends

from cinebooker.api.deps import get_gateway, require_view
from cinebooker.models import User
from cinebooker.roles import View
from cinebooker.schemas.checkin import CheckedInBookingResponse, CheckInRequest, CheckInResponse
from cinebooker.services.checkin import CheckInVerifier
from cinebooker.services.gateway import Gateway

router = APIRouter()


@router.post("/check-in", response_model=CheckInResponse)
async def check_in(
    request: CheckInRequest,
    gateway: Gateway = Depends(get_gateway),
    _: User = Depends(require_view(View.CHECK_IN)),
) -> CheckInResponse:
    """
    Verify a check-in code and mark the booking as used.

    Always answers 200; rejected codes are reported through ``success`` and
    ``message``.
    """
    result = await CheckInVerifier(gateway).check_in(request.code)
    booking = result.booking
    return CheckInResponse(
        success=result.success,
        outcome=result.outcome.value,
        message=result.message,
        booking=CheckedInBookingResponse(**vars(booking)) if booking else None,
    )
