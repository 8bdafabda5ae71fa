"""Sign-in redirects and the current user."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse

from cinebooker.api.deps import ACCESS_TOKEN_COOKIE, get_current_user, get_identity_client
from cinebooker.models import User
from cinebooker.schemas.user import UserResponse
from cinebooker.services.identity import IdentityClient

router = APIRouter()


@router.get("/auth/login", tags=["auth"])
async def login(
    redirect_to: str = Query(default="/", description="Where the provider sends the user back to"),
    identity: IdentityClient = Depends(get_identity_client),
) -> RedirectResponse:
    """Redirect to the identity provider's hosted sign-in page."""
    return RedirectResponse(identity.login_url(redirect_to), status_code=307)


@router.get("/auth/logout", tags=["auth"])
async def logout(
    redirect_to: str = Query(default="/"),
    identity: IdentityClient = Depends(get_identity_client),
) -> RedirectResponse:
    """Clear the session cookie and sign out at the identity provider."""
    response = RedirectResponse(identity.logout_url(redirect_to), status_code=307)
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    return response


@router.get("/api/me", response_model=UserResponse, tags=["auth"])
async def get_me(user: User = Depends(get_current_user)) -> UserResponse:
    """
    Current application user.

    The user record is created on the first call after sign-in.
    """
    return UserResponse.from_user(user)
