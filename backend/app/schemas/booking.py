"""Booking confirmation variants, one per booking type, plus payment records."""

import uuid
from datetime import date as date_type, datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import ConfigDict, EmailStr, Field, RootModel, TypeAdapter

from app.schemas.common import CamelModel


class BookingType(str, Enum):
    FLIGHT = "FLIGHT"
    HOTEL = "HOTEL"
    ACTIVITY = "ACTIVITY"


class FlightConfirmation(CamelModel):
    booking_type: Literal["FLIGHT"] = "FLIGHT"
    confirmation_code: str
    booking_reference: str = ""
    pnr: str = ""
    provider: str
    ticket_numbers: list[str] = []
    departure_time: datetime
    return_time: datetime | None = None
    passenger_names: list[str] = []
    total_price: int = Field(ge=0)
    currency: str = "USD"
    deep_link: str | None = None


class HotelConfirmation(CamelModel):
    booking_type: Literal["HOTEL"] = "HOTEL"
    confirmation_code: str
    booking_reference: str = ""
    hotel_name: str
    check_in: date_type
    check_out: date_type
    nights: int = Field(ge=0)
    room_type: str | None = None
    guest_names: list[str] = []
    total_price: int = Field(ge=0)
    currency: str = "USD"
    contact_phone: str | None = None
    deep_link: str | None = None


class ActivityConfirmation(CamelModel):
    booking_type: Literal["ACTIVITY"] = "ACTIVITY"
    confirmation_code: str
    booking_reference: str = ""
    activity_name: str
    date: date_type
    time: str | None = None  # HH:MM
    duration: int | None = None
    participants: int = Field(default=1, ge=1)
    total_price: int = Field(ge=0)
    currency: str = "USD"
    meeting_point: str | None = None
    contact_info: str | None = None
    deep_link: str | None = None


BookingConfirmation = Annotated[
    Union[FlightConfirmation, HotelConfirmation, ActivityConfirmation],
    Field(discriminator="booking_type"),
]

confirmation_adapter: TypeAdapter[BookingConfirmation] = TypeAdapter(BookingConfirmation)


class CreateBooking(RootModel[BookingConfirmation]):
    """Request body: one confirmation, tagged by bookingType."""


class BillingDetails(CamelModel):
    name: str | None = None
    email: EmailStr | None = None


class CreatePayment(CamelModel):
    payment_intent_id: str = Field(min_length=1)
    amount: int = Field(ge=0)
    currency: str = "USD"
    status: str = "succeeded"
    billing_details: BillingDetails | None = None


class PaymentResponse(CamelModel):
    id: uuid.UUID
    trip_option_id: uuid.UUID
    payment_intent_id: str
    amount: int
    currency: str
    status: str
    billing_details: BillingDetails | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookingResponse(CamelModel):
    id: uuid.UUID
    trip_option_id: uuid.UUID
    booking_type: BookingType
    status: str
    confirmation_code: str
    amount: int
    currency: str
    confirmation: BookingConfirmation
    created_at: datetime


class BookingConfirmations(CamelModel):
    flight: FlightConfirmation | None = None
    hotel: HotelConfirmation | None = None
    activities: list[ActivityConfirmation] = []
