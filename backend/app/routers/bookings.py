"""Bookings router — record confirmations and payments once checkout succeeds."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.routers.responses import from_service_error, parse_id
from app.schemas.booking import BookingResponse, CreateBooking, CreatePayment, PaymentResponse
from app.services.booking_service import booking_service, to_booking_response
from app.services.errors import TripPlannerError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{trip_option_id}/payment", status_code=201, response_model=PaymentResponse)
async def record_payment(trip_option_id: str, req: CreatePayment, db: AsyncSession = Depends(get_db)):
    try:
        payment = await booking_service.record_payment(
            db, parse_id(trip_option_id, "trip option id"), req
        )
    except TripPlannerError as e:
        logger.warning(f"Payment not recorded for {trip_option_id}: {e.message}")
        return from_service_error(e)
    return PaymentResponse.model_validate(payment)


@router.post("/{trip_option_id}", status_code=201, response_model=BookingResponse)
async def record_booking(
    trip_option_id: str,
    req: CreateBooking,
    db: AsyncSession = Depends(get_db),
):
    """Append a flight, hotel or activity confirmation to a trip option."""
    try:
        booking = await booking_service.record_booking(
            db, parse_id(trip_option_id, "trip option id"), req.root
        )
        return to_booking_response(booking)
    except TripPlannerError as e:
        logger.warning(f"Booking not recorded for {trip_option_id}: {e.message}")
        return from_service_error(e)


@router.get("/{trip_option_id}", response_model=list[BookingResponse])
async def list_bookings(trip_option_id: str, db: AsyncSession = Depends(get_db)):
    try:
        bookings = await booking_service.list_bookings(db, parse_id(trip_option_id, "trip option id"))
        return [to_booking_response(b) for b in bookings]
    except TripPlannerError as e:
        return from_service_error(e)
