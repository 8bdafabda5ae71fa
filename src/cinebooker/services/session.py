"""Session bootstrapper: resolves an auth state to an application user."""

import logging

from sqlalchemy.exc import IntegrityError

from cinebooker.exceptions import GatewayError, SessionBootstrapError
from cinebooker.models import User
from cinebooker.roles import Role
from cinebooker.services.gateway import Gateway
from cinebooker.services.identity import AuthState, Principal

logger = logging.getLogger(__name__)


def default_name(principal: Principal) -> str:
    """Display name, or the local part of the email when there is none."""
    if principal.display_name:
        return principal.display_name
    return principal.email.split("@")[0]


class SessionBootstrapper:
    """
    Turns identity-provider auth states into application users.

    Creates the user record on first sign-in with the customer role, so
    exactly one record exists per identity.
    """

    def __init__(self, gateway: Gateway) -> None:
        self.gateway = gateway

    async def handle(self, state: AuthState) -> User | None:
        """
        Resolve an auth-state transition.

        Args:
            state: Current auth state

        Returns:
            The application user, or None while loading or when signed out

        Raises:
            SessionBootstrapError: Lookup or creation failed; the caller may retry
        """
        if state.is_loading:
            return None
        if state.user is None:
            logger.debug("Auth state signed out, clearing session")
            return None

        try:
            return await self._resolve(state.user)
        except GatewayError as e:
            logger.error(f"Error bootstrapping session for {state.user.id}: {e}")
            raise SessionBootstrapError(f"Could not load user {state.user.id}") from e

    async def _resolve(self, principal: Principal) -> User:
        user = await self.gateway.users.first({"id": principal.id})
        if user:
            return user

        logger.info(f"Creating user record for {principal.id}")
        try:
            async with self.gateway.db.begin_nested():
                return await self.gateway.users.create(
                    id=principal.id,
                    email=principal.email,
                    name=default_name(principal),
                    role=Role.CUSTOMER.value,
                )
        except IntegrityError:
            # A concurrent first sign-in created the record first
            user = await self.gateway.users.first({"id": principal.id})
            if user is None:
                raise
            return user
