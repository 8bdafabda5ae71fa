"""Tests for profile bookings and contact details."""

from datetime import timedelta

from cinebooker.models.base import utcnow
from cinebooker.services.booking_writer import BookingWriter
from cinebooker.services.gateway import Gateway
from cinebooker.services.profile import ProfileService


async def test_lists_own_bookings_newest_first(gateway: Gateway, catalog) -> None:
    writer = BookingWriter(gateway)
    older = await writer.create_booking("show-1", ["1-1"], catalog.customer)
    newer = await writer.create_booking("show-1", ["1-2"], catalog.customer)
    await writer.create_booking("show-1", ["1-3"], catalog.other_customer)
    await gateway.bookings.update(older.id, {"created_at": utcnow() - timedelta(days=2)})

    bookings = await ProfileService(gateway).list_bookings(catalog.customer)

    assert [item.booking.id for item in bookings] == [newer.id, older.id]
    assert bookings[0].movie.title == "The Last Reel"
    assert bookings[0].theater.name == "Regal Central"


async def test_update_name_and_phone(gateway: Gateway, catalog) -> None:
    user = await ProfileService(gateway).update(catalog.customer, name="Asha K", phone="+91 98200 00000")

    assert user.name == "Asha K"
    assert user.phone == "+91 98200 00000"
    assert user.role == "customer"


async def test_empty_phone_clears_it(gateway: Gateway, catalog) -> None:
    service = ProfileService(gateway)
    await service.update(catalog.customer, phone="12345")

    user = await service.update(catalog.customer, phone="")

    assert user.phone is None
    assert user.name == "Asha"


async def test_no_changes_is_a_no_op(gateway: Gateway, catalog) -> None:
    user = await ProfileService(gateway).update(catalog.customer)
    assert user is catalog.customer
