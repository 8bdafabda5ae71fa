"""Tests for seat map, hold, booking and profile endpoints."""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient


async def test_seat_map(test_app: FastAPI, sign_in, catalog) -> None:
    sign_in(catalog.customer)
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/api/showtimes/show-1/seats")

    assert response.status_code == 200
    data = response.json()
    assert data["rows"] == 5
    assert data["seats_per_row"] == 8
    assert data["occupied"] == []
    assert data["max_seats"] == 10
    assert data["row_classes"][4] == {"row": 5, "label": "E", "seat_class": "premium", "price": 250.0}


async def test_booking_flow(test_app: FastAPI, sign_in, catalog) -> None:
    sign_in(catalog.customer)
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        created = await client.post("/api/bookings", json={"showtime_id": "show-1", "seats": ["1-2", "1-1"]})
        booking_id = created.json()["id"]
        details = await client.get(f"/api/bookings/{booking_id}")
        seat_map = await client.get("/api/showtimes/show-1/seats")

    assert created.status_code == 201
    assert created.json()["total_amount"] == 200.0
    assert created.json()["booking_status"] == "confirmed"
    assert created.json()["payment_status"] == "pending"

    assert details.status_code == 200
    assert details.json()["movie_title"] == "The Last Reel"
    assert details.json()["theater_name"] == "Regal Central"
    assert details.json()["seat_labels"] == ["A1", "A2"]

    assert seat_map.json()["occupied"] == ["1-1", "1-2"]


async def test_taken_seat_is_a_conflict(test_app: FastAPI, sign_in, catalog) -> None:
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        sign_in(catalog.customer)
        await client.post("/api/bookings", json={"showtime_id": "show-1", "seats": ["1-1"]})
        sign_in(catalog.other_customer)
        response = await client.post("/api/bookings", json={"showtime_id": "show-1", "seats": ["1-1", "1-2"]})

    assert response.status_code == 409
    assert response.json()["seats"] == ["1-1"]


async def test_padded_seat_id_is_a_conflict(test_app: FastAPI, sign_in, catalog) -> None:
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        sign_in(catalog.customer)
        await client.post("/api/bookings", json={"showtime_id": "show-1", "seats": ["1-2"]})
        sign_in(catalog.other_customer)
        response = await client.post("/api/bookings", json={"showtime_id": "show-1", "seats": ["01-2"]})

    assert response.status_code == 409
    assert response.json()["seats"] == ["1-2"]


async def test_empty_selection_is_rejected(test_app: FastAPI, sign_in, catalog) -> None:
    sign_in(catalog.customer)
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.post("/api/bookings", json={"showtime_id": "show-1", "seats": []})

    assert response.status_code == 422
    assert response.json()["detail"] == "Please select at least one seat"


async def test_other_customer_cannot_see_booking(test_app: FastAPI, sign_in, catalog) -> None:
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        sign_in(catalog.customer)
        created = await client.post("/api/bookings", json={"showtime_id": "show-1", "seats": ["1-1"]})
        sign_in(catalog.other_customer)
        response = await client.get(f"/api/bookings/{created.json()['id']}")

    assert response.status_code == 404


async def test_cancel_booking(test_app: FastAPI, sign_in, catalog) -> None:
    sign_in(catalog.customer)
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        created = await client.post("/api/bookings", json={"showtime_id": "show-1", "seats": ["1-1"]})
        booking_id = created.json()["id"]
        cancelled = await client.post(f"/api/bookings/{booking_id}/cancel")
        again = await client.post(f"/api/bookings/{booking_id}/cancel")

    assert cancelled.status_code == 200
    assert cancelled.json()["booking_status"] == "cancelled"
    assert again.status_code == 409


async def test_hold_and_release(test_app: FastAPI, sign_in, catalog) -> None:
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        sign_in(catalog.customer)
        held = await client.post("/api/showtimes/show-1/holds", json={"seats": ["3-2", "3-1"]})
        sign_in(catalog.other_customer)
        seen_by_other = await client.get("/api/showtimes/show-1/seats")
        sign_in(catalog.customer)
        released = await client.delete("/api/showtimes/show-1/holds")
        sign_in(catalog.other_customer)
        after_release = await client.get("/api/showtimes/show-1/seats")

    assert held.status_code == 200
    assert held.json()["seats"] == ["3-1", "3-2"]
    assert held.json()["expires_at"] is not None
    assert seen_by_other.json()["held"] == ["3-1", "3-2"]
    assert released.status_code == 204
    assert after_release.json()["held"] == []


async def test_profile(test_app: FastAPI, sign_in, catalog) -> None:
    sign_in(catalog.customer)
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        await client.post("/api/bookings", json={"showtime_id": "show-1", "seats": ["2-1"]})
        updated = await client.patch("/api/profile", json={"phone": "+91 98200 00000"})
        profile = await client.get("/api/profile")

    assert updated.status_code == 200
    assert updated.json()["phone"] == "+91 98200 00000"
    data = profile.json()
    assert data["user"]["name"] == "Asha"
    assert [b["booking"]["seats"] for b in data["bookings"]] == [["2-1"]]
    assert data["bookings"][0]["movie_title"] == "The Last Reel"
