"""Itinerary service — joins a trip option with its request, bookings and payment."""

import logging
import uuid
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.trip import TripOption, TripRequest
from app.schemas.activity import ActivityResponse
from app.schemas.itinerary import (
    BookingState,
    ItineraryDocument,
    ItineraryPreview,
    PaymentSummary,
    TripDates,
)
from app.schemas.trip import FlightOptionResponse, HotelOptionResponse
from app.services.booking_service import booking_service, partition_confirmations, read_billing_details
from app.services.errors import DependencyFailure, NotFoundError
from app.services.trip_service import trip_service

logger = logging.getLogger(__name__)


def resolve_trip_defaults(trip_request: TripRequest, today: date | None = None) -> TripDates:
    """
    Single place where missing trip fields are filled in.

    number_of_days falls back to the configured default (7), start_date to
    today, end_date to start_date + number_of_days.
    """
    number_of_days = trip_request.number_of_days or settings.default_trip_days
    start_date = trip_request.start_date or today or date.today()
    end_date = trip_request.end_date or start_date + timedelta(days=number_of_days)
    return TripDates(start_date=start_date, end_date=end_date, number_of_days=number_of_days)


class ItineraryService:

    async def _load(self, db: AsyncSession, trip_option_id: uuid.UUID) -> tuple[TripOption, TripRequest]:
        trip_option = await trip_service.get_trip_option(db, trip_option_id)
        if not trip_option:
            raise NotFoundError("Trip option not found")

        result = await db.execute(
            select(TripRequest)
            .join(TripOption, TripOption.trip_request_id == TripRequest.id)
            .where(TripOption.id == trip_option_id)
        )
        trip_request = result.scalars().first()
        if not trip_request:
            logger.warning(f"Trip option {trip_option_id} has no owning trip request")
            raise NotFoundError("Trip request not found")

        return trip_option, trip_request

    def _preview_fields(self, trip_option: TripOption, dates: TripDates) -> dict:
        return {
            "trip_id": trip_option.id,
            "destination": trip_option.destination,
            "start_date": dates.start_date,
            "end_date": dates.end_date,
            "number_of_days": dates.number_of_days,
            "flight": (
                FlightOptionResponse.model_validate(trip_option.flight_option)
                if trip_option.flight_option else None
            ),
            "hotel": (
                HotelOptionResponse.model_validate(trip_option.hotel_option)
                if trip_option.hotel_option else None
            ),
            "activities": [ActivityResponse.model_validate(a) for a in trip_option.activity_options],
            "total_cost": trip_option.total_cost,
            "score": trip_option.score,
        }

    async def build_preview(self, db: AsyncSession, trip_option_id: uuid.UUID) -> ItineraryPreview:
        """Preview does not need bookings or a payment."""
        try:
            trip_option, trip_request = await self._load(db, trip_option_id)
        except SQLAlchemyError as e:
            raise DependencyFailure(f"Datastore error loading trip option {trip_option_id}") from e
        dates = resolve_trip_defaults(trip_request)
        return ItineraryPreview(**self._preview_fields(trip_option, dates))

    async def assemble_itinerary(self, db: AsyncSession, trip_option_id: uuid.UUID) -> ItineraryDocument:
        try:
            trip_option, trip_request = await self._load(db, trip_option_id)
            bookings = await booking_service.list_bookings(db, trip_option_id)
            payment = await booking_service.get_payment(db, trip_option_id)
        except SQLAlchemyError as e:
            raise DependencyFailure(f"Datastore error loading trip option {trip_option_id}") from e

        dates = resolve_trip_defaults(trip_request)
        billing = read_billing_details(payment)

        return ItineraryDocument(
            **self._preview_fields(trip_option, dates),
            traveler_name=(billing and billing.name) or settings.placeholder_traveler_name,
            traveler_email=(billing and billing.email) or settings.placeholder_traveler_email,
            remaining_budget=trip_option.remaining_budget,
            state=BookingState.CONFIRMED,
            confirmations=partition_confirmations(bookings),
            payment=(
                PaymentSummary(
                    payment_intent_id=payment.payment_intent_id,
                    amount=payment.amount,
                    currency=payment.currency,
                )
                if payment else None
            ),
        )


itinerary_service = ItineraryService()
