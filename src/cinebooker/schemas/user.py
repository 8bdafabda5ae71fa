"""Pydantic schemas for users and profiles."""

from pydantic import BaseModel, ConfigDict, Field

from cinebooker.models import User
from cinebooker.roles import allowed_views
from cinebooker.schemas.booking import BookingDetailResponse


class UserResponse(BaseModel):
    """Current user with the views their role may reach."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    phone: str | None = None
    role: str
    theater_id: str | None = None
    views: list[str] = Field(default_factory=list)

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        response = cls.model_validate(user)
        response.views = [view.value for view in allowed_views(user.role)]
        return response


class ProfileUpdate(BaseModel):
    """Editable profile fields; omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    phone: str | None = Field(default=None, max_length=50)


class ProfileResponse(BaseModel):
    user: UserResponse
    bookings: list[BookingDetailResponse]
