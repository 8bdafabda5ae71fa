"""Tests for session resolution, sign-in redirects and /api/me."""

from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from cinebooker.api.deps import get_gateway, get_identity_client
from cinebooker.exceptions import GatewayError
from cinebooker.services.identity import LOADING, SIGNED_OUT, AuthState, IdentityClient, Principal


class RecordingIdentity:
    """Identity client stand-in that records the tokens it is asked about."""

    def __init__(self) -> None:
        self.tokens: list[str | None] = []

    async def auth_state(self, token: str | None) -> AuthState:
        self.tokens.append(token)
        return SIGNED_OUT


# ---------------------------------------------------------------------------
# /api/me
# ---------------------------------------------------------------------------


async def test_me_returns_user_and_views(test_app: FastAPI, sign_in, catalog) -> None:
    sign_in(catalog.theater_admin)
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/me")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "staff-1"
    assert data["role"] == "theater_admin"
    assert data["theater_id"] == "regal-central"
    assert "theater_dashboard" in data["views"]
    assert "platform_dashboard" not in data["views"]


async def test_first_sign_in_creates_customer(test_app: FastAPI, sign_in) -> None:
    sign_in(AuthState(user=Principal(id="fresh", email="neha@example.com")))
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/me")

    assert response.status_code == 200
    assert response.json()["name"] == "neha"
    assert response.json()["role"] == "customer"


async def test_signed_out_is_unauthorized(test_app: FastAPI, sign_in) -> None:
    sign_in(None)
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/me")

    assert response.status_code == 401


async def test_loading_session_asks_to_retry(test_app: FastAPI, sign_in) -> None:
    sign_in(LOADING)
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/me")

    assert response.status_code == 503
    assert "Retry-After" in response.headers


async def test_bootstrap_failure_asks_to_retry(test_app: FastAPI, sign_in) -> None:
    sign_in(AuthState(user=Principal(id="abc", email="a@b.c")))
    gateway = MagicMock()
    gateway.users.first = AsyncMock(side_effect=GatewayError("Failed to list users"))
    test_app.dependency_overrides[get_gateway] = lambda: gateway

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/me")

    assert response.status_code == 503
    assert response.headers["Retry-After"] == "5"
    assert response.json()["detail"] == "Something went wrong. Please try again."


# ---------------------------------------------------------------------------
# Token extraction
# ---------------------------------------------------------------------------


async def test_bearer_token_is_passed_to_identity_provider(test_app: FastAPI) -> None:
    identity = RecordingIdentity()
    test_app.dependency_overrides[get_identity_client] = lambda: identity

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/me", headers={"Authorization": "Bearer abc123"})

    assert response.status_code == 401
    assert identity.tokens == ["abc123"]


async def test_cookie_token_is_used_without_header(test_app: FastAPI) -> None:
    identity = RecordingIdentity()
    test_app.dependency_overrides[get_identity_client] = lambda: identity

    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
        cookies={"access_token": "cookie-token"},
    ) as client:
        await client.get("/api/me")

    assert identity.tokens == ["cookie-token"]


async def test_no_token_is_signed_out(test_app: FastAPI) -> None:
    identity = RecordingIdentity()
    test_app.dependency_overrides[get_identity_client] = lambda: identity

    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        await client.get("/api/me")

    assert identity.tokens == [None]


# ---------------------------------------------------------------------------
# Redirects
# ---------------------------------------------------------------------------


async def test_login_redirects_to_identity_provider(test_app: FastAPI) -> None:
    test_app.dependency_overrides[get_identity_client] = lambda: IdentityClient(
        base_url="https://auth.test", api_key="key"
    )
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/auth/login", params={"redirect_to": "/profile"})

    assert response.status_code == 307
    assert response.headers["location"] == "https://auth.test/login?redirect_url=%2Fprofile"


async def test_logout_clears_cookie(test_app: FastAPI) -> None:
    test_app.dependency_overrides[get_identity_client] = lambda: IdentityClient(
        base_url="https://auth.test", api_key="key"
    )
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/auth/logout")

    assert response.status_code == 307
    assert response.headers["location"].startswith("https://auth.test/logout?")
    assert "access_token" in response.headers["set-cookie"]
