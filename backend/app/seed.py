"""Seed script for the TripOptimizer development database.

Creates one Paris trip request with a booked, paid trip option so the
itinerary preview and PDF download have something to show.

    python -m app.seed
"""

import asyncio
from datetime import date, datetime, timedelta, timezone

from sqlalchemy import select

from app import models  # noqa: F401
from app.config import settings
from app.database import Database
from app.models.trip import TripRequest
from app.schemas.booking import (
    ActivityConfirmation,
    BillingDetails,
    CreatePayment,
    FlightConfirmation,
    HotelConfirmation,
)
from app.schemas.common import TravelStyle
from app.schemas.trip import CreateTripOption, CreateTripRequest, FlightOffer, HotelOffer
from app.services.booking_service import booking_service
from app.services.trip_service import trip_service

# ── Trip ───────────────────────────────────────────────────────────────────────

START = date.today() + timedelta(days=30)
DAYS = 5

TRIP_REQUEST = CreateTripRequest(
    origin_city="New York",
    destination="Paris",
    start_date=START,
    number_of_days=DAYS,
    budget_total=300000,
    travel_style=TravelStyle.BALANCED,
)

DEPARTURE = datetime(START.year, START.month, START.day, 18, 30, tzinfo=timezone.utc)
RETURN = DEPARTURE + timedelta(days=DAYS)

TRIP_OPTION = CreateTripOption(
    flight=FlightOffer(
        provider="Air France",
        price=85000,
        departure_time=DEPARTURE,
        return_time=RETURN,
        deep_link="https://example.com/flights/af-jfk-cdg",
    ),
    hotel=HotelOffer(
        name="Hôtel Le Marais",
        price_total=110000,
        rating=4.4,
        deep_link="https://example.com/hotels/le-marais",
    ),
    score=86.5,
    explanation="Direct flight and a central hotel leave room for a full activity plan.",
)


async def seed(database: Database) -> bool:
    """Returns False when the database already holds trip requests."""
    async with database.session() as db:
        result = await db.execute(select(TripRequest).limit(1))
        if result.scalar_one_or_none():
            print("Database already seeded. Skipping.")
            return False

        trip_request = await trip_service.create_trip_request(db, TRIP_REQUEST)
        option = await trip_service.create_trip_option(db, trip_request, TRIP_OPTION)
        print(f"Created trip option {option.id} ({option.destination}, total {option.total_cost})")

        await booking_service.record_payment(db, option.id, CreatePayment(
            payment_intent_id=f"pi_seed_{option.id.hex[:12]}",
            amount=option.total_cost,
            currency=settings.default_currency,
            billing_details=BillingDetails(name="Alex Traveler", email="alex@example.com"),
        ))

        await booking_service.record_booking(db, option.id, FlightConfirmation(
            confirmation_code="AF7K2Q",
            booking_reference="AF-20391",
            pnr="X7K2QP",
            provider=TRIP_OPTION.flight.provider,
            departure_time=DEPARTURE,
            return_time=RETURN,
            passenger_names=["Alex Traveler"],
            total_price=TRIP_OPTION.flight.price,
        ))
        await booking_service.record_booking(db, option.id, HotelConfirmation(
            confirmation_code="HLM-5521",
            booking_reference="HLM-88120",
            hotel_name=TRIP_OPTION.hotel.name,
            check_in=START,
            check_out=START + timedelta(days=DAYS),
            nights=DAYS,
            guest_names=["Alex Traveler"],
            total_price=TRIP_OPTION.hotel.price_total,
        ))
        for i, activity in enumerate(option.activity_options):
            await booking_service.record_booking(db, option.id, ActivityConfirmation(
                confirmation_code=f"ACT-{i + 1:03d}",
                activity_name=activity.name,
                date=START + timedelta(days=i % DAYS),
                time="10:00",
                duration=activity.duration,
                total_price=activity.price,
            ))
        print(f"Recorded payment and {len(option.activity_options) + 2} bookings")
        return True


async def main():
    database = Database(settings.database_url, echo=settings.database_echo)
    await database.connect(create_schema=True)
    try:
        await seed(database)
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
