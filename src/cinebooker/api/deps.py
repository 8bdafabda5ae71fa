"""Request-scoped dependencies: gateway, identity and role checks."""

import logging

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from cinebooker.api.errors import RETRY_AFTER_SECONDS
from cinebooker.database import get_db
from cinebooker.models import User
from cinebooker.roles import View, can_access
from cinebooker.services.gateway import Gateway
from cinebooker.services.identity import AuthState, IdentityClient
from cinebooker.services.session import SessionBootstrapper

logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "access_token"


def get_gateway(db: AsyncSession = Depends(get_db)) -> Gateway:
    return Gateway(db)


def get_identity_client() -> IdentityClient:
    return IdentityClient()


def get_access_token(request: Request) -> str | None:
    """Bearer token from the Authorization header, falling back to the session cookie."""
    authorization = request.headers.get("Authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return request.cookies.get(ACCESS_TOKEN_COOKIE) or None


async def get_auth_state(
    token: str | None = Depends(get_access_token),
    identity: IdentityClient = Depends(get_identity_client),
) -> AuthState:
    return await identity.auth_state(token)


async def get_current_user(
    state: AuthState = Depends(get_auth_state),
    gateway: Gateway = Depends(get_gateway),
) -> User:
    """
    Resolve the request's auth state to an application user.

    Raises:
        HTTPException: 503 while the session is loading, 401 when signed out
    """
    if state.is_loading:
        raise HTTPException(
            status_code=503,
            detail="Session is loading",
            headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
        )

    user = await SessionBootstrapper(gateway).handle(state)
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Not signed in",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_view(view: View):
    """Dependency factory: the current user, or 403 if their role cannot reach ``view``."""

    async def dependency(user: User = Depends(get_current_user)) -> User:
        if not can_access(user.role, view):
            logger.info(f"User {user.id} ({user.role}) denied access to {view}")
            raise HTTPException(status_code=403, detail=f"Your role cannot access {view}")
        return user

    return dependency
