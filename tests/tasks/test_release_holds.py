"""Tests for the expired seat hold sweep."""

from datetime import timedelta

from cinebooker.models import SeatClaim
from cinebooker.models.base import utcnow
from cinebooker.services.gateway import Gateway
from cinebooker.tasks.release_holds import release_expired_holds_in


async def test_deletes_only_expired_holds(gateway: Gateway, catalog) -> None:
    now = utcnow()
    gateway.db.add_all(
        [
            SeatClaim(showtime_id="show-1", seat_id="1-1", user_id=catalog.customer.id, expires_at=now - timedelta(minutes=2)),
            SeatClaim(showtime_id="show-1", seat_id="1-2", user_id=catalog.customer.id, expires_at=now + timedelta(minutes=5)),
            SeatClaim(showtime_id="show-1", seat_id="1-3", user_id=catalog.customer.id, booking_id="booking_x"),
        ]
    )
    await gateway.db.flush()

    released = await release_expired_holds_in(gateway.db)

    assert released == 1
    remaining = await gateway.seat_claims.list(where={"showtime_id": "show-1"})
    assert sorted(claim.seat_id for claim in remaining) == ["1-2", "1-3"]


async def test_nothing_to_release(gateway: Gateway, catalog) -> None:
    assert await release_expired_holds_in(gateway.db) == 0
