"""Trip service — trip requests and assembly of priced trip options."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.models.trip import FlightOption, HotelOption, TripOption, TripRequest
from app.schemas.activity import ActivityCandidate
from app.schemas.trip import CreateTripOption, CreateTripRequest
from app.services.activity_service import activity_service
from app.services.budget_service import allocate_budget
from app.services.errors import ValidationFailure

logger = logging.getLogger(__name__)


def build_day_plan(destination: str, number_of_days: int, activities: list[ActivityCandidate]) -> list[dict]:
    """Spread activities round-robin over the trip's days."""
    days = [
        {"day": d + 1, "title": f"Day {d + 1} in {destination}", "activities": []}
        for d in range(number_of_days)
    ]
    for i, activity in enumerate(activities):
        days[i % number_of_days]["activities"].append(activity.name)
    days[0]["title"] = f"Arrival in {destination}"
    if number_of_days > 1:
        days[-1]["title"] = f"Departure from {destination}"
    return days


def _options_query():
    return select(TripOption).options(
        selectinload(TripOption.flight_option),
        selectinload(TripOption.hotel_option),
        selectinload(TripOption.activity_options),
    )


class TripService:

    async def create_trip_request(self, db: AsyncSession, req: CreateTripRequest) -> TripRequest:
        number_of_days = req.number_of_days
        if number_of_days is None and req.start_date and req.end_date:
            number_of_days = max((req.end_date - req.start_date).days, 1)

        trip_request = TripRequest(
            origin_city=req.origin_city,
            destination=req.destination,
            start_date=req.start_date,
            end_date=req.end_date,
            number_of_days=number_of_days,
            budget_total=req.budget_total,
            travel_style=req.travel_style.value,
        )
        db.add(trip_request)
        await db.commit()
        await db.refresh(trip_request)
        logger.info(f"Created trip request {trip_request.id} ({req.origin_city} -> {req.destination})")
        return trip_request

    async def get_trip_request(self, db: AsyncSession, trip_request_id: uuid.UUID) -> TripRequest | None:
        result = await db.execute(select(TripRequest).where(TripRequest.id == trip_request_id))
        return result.scalar_one_or_none()

    async def get_trip_request_with_options(
        self, db: AsyncSession, trip_request_id: uuid.UUID
    ) -> TripRequest | None:
        result = await db.execute(
            select(TripRequest)
            .where(TripRequest.id == trip_request_id)
            .options(
                selectinload(TripRequest.trip_options).selectinload(TripOption.flight_option),
                selectinload(TripRequest.trip_options).selectinload(TripOption.hotel_option),
                selectinload(TripRequest.trip_options).selectinload(TripOption.activity_options),
            )
        )
        return result.scalar_one_or_none()

    async def get_trip_option(self, db: AsyncSession, trip_option_id: uuid.UUID) -> TripOption | None:
        result = await db.execute(
            _options_query()
            .where(TripOption.id == trip_option_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_trip_option(
        self, db: AsyncSession, trip_request: TripRequest, req: CreateTripOption
    ) -> TripOption:
        """
        Assemble a trip option from a chosen flight and hotel.

        The activity budget comes from the travel-style allocation; activities
        are picked by the activity service and written after the option row.
        """
        destination = req.destination or trip_request.destination
        if not destination:
            raise ValidationFailure("Destination is required")

        number_of_days = trip_request.number_of_days or settings.default_trip_days
        allocation = allocate_budget(trip_request.budget_total, trip_request.travel_style)
        selection = activity_service.select_activities(
            destination=destination,
            number_of_days=number_of_days,
            activity_budget=allocation.activities_budget,
            travel_style=trip_request.travel_style,
        )

        total_cost = req.flight.price + req.hotel.price_total + selection.total_cost
        trip_option = TripOption(
            trip_request_id=trip_request.id,
            destination=destination,
            total_cost=total_cost,
            remaining_budget=trip_request.budget_total - total_cost,
            activity_budget=allocation.activities_budget,
            score=req.score,
            explanation=req.explanation,
            itinerary_json=build_day_plan(destination, number_of_days, selection.activities),
            flight_option=FlightOption(
                provider=req.flight.provider,
                price=req.flight.price,
                departure_time=req.flight.departure_time,
                return_time=req.flight.return_time,
                deep_link=req.flight.deep_link,
            ),
            hotel_option=HotelOption(
                name=req.hotel.name,
                price_total=req.hotel.price_total,
                rating=req.hotel.rating,
                deep_link=req.hotel.deep_link,
            ),
        )
        db.add(trip_option)
        await db.flush()

        await activity_service.create_activity_options(db, trip_option.id, selection.activities)
        logger.info(
            f"Created trip option {trip_option.id} for {destination}: "
            f"total={total_cost} remaining={trip_option.remaining_budget} "
            f"activities={len(selection.activities)}"
        )
        return await self.get_trip_option(db, trip_option.id)


trip_service = TripService()
