"""Identity provider client for resolving bearer tokens to principals."""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from cinebooker.config import settings
from cinebooker.exceptions import GatewayError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """The authenticated identity as reported by the provider."""

    id: str
    email: str
    display_name: str | None = None


@dataclass(frozen=True)
class AuthState:
    """
    Snapshot of an authentication-state transition.

    user is None when signed out. is_loading is set while the provider has
    not yet settled on either state.
    """

    user: Principal | None
    is_loading: bool = False


SIGNED_OUT = AuthState(user=None)
LOADING = AuthState(user=None, is_loading=True)


class IdentityClient:
    """Client for the external identity provider."""

    def __init__(self, base_url: str | None = None, api_key: str | None = None) -> None:
        """
        Initialize identity client.

        Args:
            base_url: Provider base URL (uses settings if not provided)
            api_key: Project API key sent with every request (uses settings if not provided)
        """
        self.base_url = (base_url or settings.identity_base_url).rstrip("/")
        self.api_key = api_key or settings.identity_api_key
        if not self.api_key:
            logger.warning("Identity provider API key not configured")

    def login_url(self, redirect_to: str) -> str:
        return f"{self.base_url}/login?{urlencode({'redirect_url': redirect_to})}"

    def logout_url(self, redirect_to: str) -> str:
        return f"{self.base_url}/logout?{urlencode({'redirect_url': redirect_to})}"

    async def me(self, token: str) -> Principal | None:
        """
        Resolve a bearer token to the signed-in principal.

        Args:
            token: Access token issued by the provider

        Returns:
            The principal, or None if the token is invalid or expired

        Raises:
            GatewayError: The provider could not be reached or answered with a server error
        """
        headers = {"Authorization": f"Bearer {token}"}
        if self.api_key:
            headers["X-Api-Key"] = self.api_key

        try:
            async with httpx.AsyncClient(timeout=settings.identity_timeout) as client:
                response = await client.get(f"{self.base_url}/me", headers=headers)
                if response.status_code in (401, 403):
                    logger.info("Identity provider rejected token")
                    return None
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Identity provider error: {e}")
            raise GatewayError("Identity provider unavailable") from e

        user_id = data.get("id")
        email = data.get("email")
        if not user_id or not email:
            logger.warning(f"Identity provider returned incomplete principal: {data!r}")
            return None

        return Principal(
            id=str(user_id),
            email=email,
            display_name=data.get("displayName") or data.get("display_name"),
        )

    async def auth_state(self, token: str | None) -> AuthState:
        """Build the auth state for a request's token (signed out when absent)."""
        if not token:
            return SIGNED_OUT
        principal = await self.me(token)
        return AuthState(user=principal)
