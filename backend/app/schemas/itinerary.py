import uuid
from datetime import date
from enum import Enum

from app.schemas.activity import ActivityResponse
from app.schemas.booking import BookingConfirmations
from app.schemas.common import CamelModel
from app.schemas.trip import FlightOptionResponse, HotelOptionResponse


class BookingState(str, Enum):
    PENDING = "PENDING"
    VALIDATING = "VALIDATING"
    PROCESSING = "PROCESSING"
    CONFIRMED = "CONFIRMED"
    FAILED = "FAILED"
    PARTIAL_CONFIRMED = "PARTIAL_CONFIRMED"


class TripDates(CamelModel):
    start_date: date
    end_date: date
    number_of_days: int


class PaymentSummary(CamelModel):
    payment_intent_id: str
    amount: int
    currency: str


class ItineraryPreview(CamelModel):
    trip_id: uuid.UUID
    destination: str
    start_date: date
    end_date: date
    number_of_days: int
    flight: FlightOptionResponse | None
    hotel: HotelOptionResponse | None
    activities: list[ActivityResponse]
    total_cost: int
    score: float


class ItineraryDocument(ItineraryPreview):
    """Everything the PDF renderer needs for one booked trip option."""

    traveler_name: str
    traveler_email: str
    remaining_budget: int
    state: BookingState = BookingState.CONFIRMED
    confirmations: BookingConfirmations
    payment: PaymentSummary | None = None
