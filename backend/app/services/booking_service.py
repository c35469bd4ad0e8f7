"""Booking service — append-only confirmation and payment records for trip options."""

import logging
import uuid

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.booking import Booking, Payment
from app.models.trip import TripOption
from app.schemas.booking import (
    ActivityConfirmation,
    BillingDetails,
    BookingConfirmation,
    BookingConfirmations,
    BookingResponse,
    CreatePayment,
    FlightConfirmation,
    HotelConfirmation,
    confirmation_adapter,
)
from app.services.errors import DependencyFailure, NotFoundError, ValidationFailure

logger = logging.getLogger(__name__)

PAYMENT_SUCCEEDED = "succeeded"


def read_confirmation(booking: Booking) -> BookingConfirmation:
    """Re-validate stored details; a row that no longer matches its variant is a data error."""
    try:
        confirmation = confirmation_adapter.validate_python(booking.booking_details)
    except ValidationError as e:
        raise DependencyFailure(f"Booking {booking.id} has invalid confirmation details: {e}") from e
    if confirmation.booking_type != booking.booking_type:
        raise DependencyFailure(f"Booking {booking.id} type does not match its confirmation")
    return confirmation


def read_billing_details(payment: Payment | None) -> BillingDetails | None:
    if payment is None or not payment.billing_details:
        return None
    return BillingDetails.model_validate(payment.billing_details)


def partition_confirmations(bookings: list[Booking]) -> BookingConfirmations:
    """Group bookings by type. The first flight and hotel win; activities keep their order."""
    flight = None
    hotel = None
    activities: list[ActivityConfirmation] = []
    for booking in bookings:
        confirmation = read_confirmation(booking)
        if isinstance(confirmation, FlightConfirmation) and flight is None:
            flight = confirmation
        elif isinstance(confirmation, HotelConfirmation) and hotel is None:
            hotel = confirmation
        elif isinstance(confirmation, ActivityConfirmation):
            activities.append(confirmation)
    return BookingConfirmations(flight=flight, hotel=hotel, activities=activities)


def to_booking_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        id=booking.id,
        trip_option_id=booking.trip_option_id,
        booking_type=booking.booking_type,
        status=booking.status,
        confirmation_code=booking.confirmation_code,
        amount=booking.amount,
        currency=booking.currency,
        confirmation=read_confirmation(booking),
        created_at=booking.created_at,
    )


class BookingService:

    async def _require_trip_option(self, db: AsyncSession, trip_option_id: uuid.UUID) -> None:
        result = await db.execute(select(TripOption.id).where(TripOption.id == trip_option_id))
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Trip option not found")

    async def record_booking(
        self,
        db: AsyncSession,
        trip_option_id: uuid.UUID,
        confirmation: BookingConfirmation,
        status: str = "CONFIRMED",
    ) -> Booking:
        await self._require_trip_option(db, trip_option_id)
        payment = await self.get_payment(db, trip_option_id)
        if payment is None or payment.status != PAYMENT_SUCCEEDED:
            raise ValidationFailure("Payment required before booking")

        booking = Booking(
            trip_option_id=trip_option_id,
            booking_type=confirmation.booking_type,
            status=status,
            confirmation_code=confirmation.confirmation_code,
            amount=confirmation.total_price,
            currency=confirmation.currency,
            booking_details=confirmation.model_dump(mode="json", by_alias=True),
        )
        db.add(booking)
        await db.commit()
        await db.refresh(booking)
        logger.info(
            f"Recorded {booking.booking_type} booking {booking.confirmation_code} "
            f"for trip option {trip_option_id}"
        )
        return booking

    async def list_bookings(self, db: AsyncSession, trip_option_id: uuid.UUID) -> list[Booking]:
        result = await db.execute(
            select(Booking)
            .where(Booking.trip_option_id == trip_option_id)
            .order_by(Booking.created_at, Booking.id)
        )
        return list(result.scalars().all())

    async def record_payment(
        self, db: AsyncSession, trip_option_id: uuid.UUID, req: CreatePayment
    ) -> Payment:
        await self._require_trip_option(db, trip_option_id)
        if await self.get_payment(db, trip_option_id):
            raise ValidationFailure("Payment already recorded for this trip option")

        payment = Payment(
            trip_option_id=trip_option_id,
            payment_intent_id=req.payment_intent_id,
            amount=req.amount,
            currency=req.currency,
            status=req.status,
            billing_details=(
                req.billing_details.model_dump(mode="json", by_alias=True) if req.billing_details else None
            ),
        )
        db.add(payment)
        try:
            await db.commit()
        except IntegrityError as e:
            # same intent on another option, or a concurrent first payment
            await db.rollback()
            raise ValidationFailure("Payment already recorded") from e
        await db.refresh(payment)
        logger.info(f"Recorded payment {req.payment_intent_id} for trip option {trip_option_id}")
        return payment

    async def get_payment(self, db: AsyncSession, trip_option_id: uuid.UUID) -> Payment | None:
        result = await db.execute(select(Payment).where(Payment.trip_option_id == trip_option_id))
        return result.scalars().first()


booking_service = BookingService()
