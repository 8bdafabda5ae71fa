"""SQLAdmin authentication backend."""

import logging
import secrets

from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from cinebooker.config import settings

logger = logging.getLogger(__name__)


def credentials_match(username: str, password: str) -> bool:
    """Constant-time comparison against the configured back-office account."""
    return secrets.compare_digest(username, settings.admin_username) and secrets.compare_digest(
        password, settings.admin_password
    )


class AdminAuth(AuthenticationBackend):
    async def login(self, request: Request) -> bool:
        form = await request.form()
        ok = credentials_match(str(form.get("username") or ""), str(form.get("password") or ""))
        if ok:
            request.session.update({"authenticated": True})
        else:
            logger.warning("Rejected back-office login attempt")
        return ok

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return request.session.get("authenticated", False)
