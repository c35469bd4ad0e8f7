import uuid
from datetime import date, datetime, timezone

import pytest

from app.models.booking import Booking
from app.schemas.booking import (
    ActivityConfirmation,
    BillingDetails,
    CreatePayment,
    FlightConfirmation,
    HotelConfirmation,
)
from app.services.booking_service import booking_service, partition_confirmations, read_confirmation
from app.services.errors import DependencyFailure, NotFoundError, ValidationFailure
from app.services.trip_service import trip_service

from conftest import trip_option_payload, trip_request_payload


def flight_confirmation(code="AF1234") -> FlightConfirmation:
    return FlightConfirmation(
        confirmation_code=code,
        provider="Air France",
        departure_time=datetime(2026, 6, 1, 18, 0, tzinfo=timezone.utc),
        total_price=90000,
    )


def hotel_confirmation(code="HTL-1") -> HotelConfirmation:
    return HotelConfirmation(
        confirmation_code=code,
        hotel_name="Hotel Lutetia",
        check_in=date(2026, 6, 1),
        check_out=date(2026, 6, 8),
        nights=7,
        total_price=120000,
    )


def activity_confirmation(code, name) -> ActivityConfirmation:
    return ActivityConfirmation(
        confirmation_code=code,
        activity_name=name,
        date=date(2026, 6, 2),
        time="10:00",
        total_price=3500,
    )


async def pay(session, trip_option, intent="pi_paid", status="succeeded"):
    return await booking_service.record_payment(session, trip_option.id, CreatePayment(
        payment_intent_id=intent, amount=trip_option.total_cost, status=status,
    ))


PAYMENT_BODY = {"paymentIntentId": "pi_abc", "amount": 1000, "billingDetails": {"name": "Sam"}}

HOTEL_BODY = {
    "bookingType": "HOTEL",
    "confirmationCode": "HTL-9",
    "hotelName": "Hotel Lutetia",
    "checkIn": "2026-06-01",
    "checkOut": "2026-06-08",
    "nights": 7,
    "totalPrice": 120000,
}


async def test_bookings_are_listed_in_insertion_order(session, trip_option):
    await pay(session, trip_option)
    await booking_service.record_booking(session, trip_option.id, flight_confirmation())
    await booking_service.record_booking(session, trip_option.id, activity_confirmation("A1", "Louvre"))
    await booking_service.record_booking(session, trip_option.id, hotel_confirmation())
    await booking_service.record_booking(session, trip_option.id, activity_confirmation("A2", "Cruise"))

    bookings = await booking_service.list_bookings(session, trip_option.id)
    assert [b.booking_type for b in bookings] == ["FLIGHT", "ACTIVITY", "HOTEL", "ACTIVITY"]
    assert bookings[0].amount == 90000

    confirmations = partition_confirmations(bookings)
    assert confirmations.flight.confirmation_code == "AF1234"
    assert confirmations.hotel.nights == 7
    assert [a.confirmation_code for a in confirmations.activities] == ["A1", "A2"]


async def test_first_flight_wins(session, trip_option):
    await pay(session, trip_option)
    await booking_service.record_booking(session, trip_option.id, flight_confirmation("FIRST"))
    await booking_service.record_booking(session, trip_option.id, flight_confirmation("SECOND"))

    bookings = await booking_service.list_bookings(session, trip_option.id)
    assert partition_confirmations(bookings).flight.confirmation_code == "FIRST"


async def test_booking_requires_payment(session, trip_option):
    with pytest.raises(ValidationFailure, match="Payment required before booking"):
        await booking_service.record_booking(session, trip_option.id, flight_confirmation())
    assert await booking_service.list_bookings(session, trip_option.id) == []


async def test_booking_requires_succeeded_payment(session, trip_option):
    await pay(session, trip_option, status="requires_action")
    with pytest.raises(ValidationFailure, match="Payment required before booking"):
        await booking_service.record_booking(session, trip_option.id, hotel_confirmation())


async def test_booking_for_unknown_trip_option(session):
    with pytest.raises(NotFoundError):
        await booking_service.record_booking(session, uuid.uuid4(), flight_confirmation())


def test_mismatched_booking_row_is_a_data_error():
    booking = Booking(
        id=uuid.uuid4(),
        booking_type="HOTEL",
        booking_details=flight_confirmation().model_dump(mode="json", by_alias=True),
    )
    with pytest.raises(DependencyFailure) as exc_info:
        read_confirmation(booking)
    assert exc_info.value.status_code == 500

    booking.booking_details = {"bookingType": "FLIGHT", "confirmationCode": "X"}
    with pytest.raises(DependencyFailure):
        read_confirmation(booking)


async def test_second_payment_rejected(session, trip_option):
    req = CreatePayment(
        payment_intent_id="pi_123",
        amount=trip_option.total_cost,
        billing_details=BillingDetails(name="Sam Doe", email="sam@example.com"),
    )
    payment = await booking_service.record_payment(session, trip_option.id, req)
    assert payment.billing_details == {"name": "Sam Doe", "email": "sam@example.com"}

    with pytest.raises(ValidationFailure, match="Payment already recorded"):
        await booking_service.record_payment(
            session, trip_option.id, CreatePayment(payment_intent_id="pi_456", amount=1)
        )


async def test_booking_routes(client, trip_option):
    paid = await client.post(f"/api/bookings/{trip_option.id}/payment", json=PAYMENT_BODY)
    assert paid.status_code == 201, paid.text

    resp = await client.post(f"/api/bookings/{trip_option.id}", json=HOTEL_BODY)
    assert resp.status_code == 201, resp.text
    booking = resp.json()
    assert booking["bookingType"] == "HOTEL"
    assert booking["confirmation"]["hotelName"] == "Hotel Lutetia"

    listed = (await client.get(f"/api/bookings/{trip_option.id}")).json()
    assert [b["confirmationCode"] for b in listed] == ["HTL-9"]


async def test_booking_route_rejects_unpaid_option(client, trip_option):
    resp = await client.post(f"/api/bookings/{trip_option.id}", json=HOTEL_BODY)
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Payment required before booking"}

    listed = (await client.get(f"/api/bookings/{trip_option.id}")).json()
    assert listed == []


async def test_booking_route_rejects_unknown_type(client, trip_option):
    resp = await client.post(f"/api/bookings/{trip_option.id}", json={
        "bookingType": "CRUISE",
        "confirmationCode": "X",
        "totalPrice": 1,
    })
    assert resp.status_code == 422


async def test_payment_routes(client, trip_option):
    url = f"/api/bookings/{trip_option.id}/payment"

    first = await client.post(url, json=PAYMENT_BODY)
    assert first.status_code == 201, first.text
    assert first.json()["paymentIntentId"] == "pi_abc"

    second = await client.post(url, json={**PAYMENT_BODY, "paymentIntentId": "pi_def"})
    assert second.status_code == 400
    assert second.json() == {
        "success": False,
        "error": "Payment already recorded for this trip option",
    }

    missing = await client.post(f"/api/bookings/{uuid.uuid4()}/payment", json=PAYMENT_BODY)
    assert missing.status_code == 404


async def test_payment_intent_reused_on_another_option(client, session, trip_option):
    trip_request = await trip_service.create_trip_request(session, trip_request_payload())
    other = await trip_service.create_trip_option(session, trip_request, trip_option_payload())

    first = await client.post(f"/api/bookings/{trip_option.id}/payment", json=PAYMENT_BODY)
    assert first.status_code == 201, first.text

    reused = await client.post(f"/api/bookings/{other.id}/payment", json=PAYMENT_BODY)
    assert reused.status_code == 400
    assert reused.json() == {"success": False, "error": "Payment already recorded"}

    # the failed write left nothing behind and the option can still be paid
    retry = await client.post(
        f"/api/bookings/{other.id}/payment", json={**PAYMENT_BODY, "paymentIntentId": "pi_other"}
    )
    assert retry.status_code == 201, retry.text
