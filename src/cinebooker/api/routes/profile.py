"""Profile API endpoints."""

from fastapi import APIRouter, Depends

from cinebooker.api.deps import get_gateway, require_view
from cinebooker.api.routes.bookings import booking_detail_response
from cinebooker.models import User
from cinebooker.roles import View
from cinebooker.schemas.user import ProfileResponse, ProfileUpdate, UserResponse
from cinebooker.services.gateway import Gateway
from cinebooker.services.profile import ProfileService

router = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    gateway: Gateway = Depends(get_gateway),
    user: User = Depends(require_view(View.PROFILE)),
) -> ProfileResponse:
    """The current user and their bookings, newest first."""
    bookings = await ProfileService(gateway).list_bookings(user)
    return ProfileResponse(
        user=UserResponse.from_user(user),
        bookings=[booking_detail_response(details) for details in bookings],
    )


@router.patch("/profile", response_model=UserResponse)
async def update_profile(
    request: ProfileUpdate,
    gateway: Gateway = Depends(get_gateway),
    user: User = Depends(require_view(View.PROFILE)),
) -> UserResponse:
    updated = await ProfileService(gateway).update(user, name=request.name, phone=request.phone)
    return UserResponse.from_user(updated)
