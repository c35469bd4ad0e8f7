import uuid
from datetime import date, datetime

from pydantic import ConfigDict, Field, model_validator

from app.schemas.activity import ActivityResponse
from app.schemas.common import CamelModel, LockStatus, TravelStyle


class CreateTripRequest(CamelModel):
    origin_city: str = Field(min_length=1)
    destination: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    number_of_days: int | None = Field(default=None, ge=1)
    budget_total: int = Field(ge=0)  # cents
    travel_style: TravelStyle = TravelStyle.BALANCED

    @model_validator(mode="after")
    def _check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class FlightOffer(CamelModel):
    provider: str
    price: int = Field(ge=0)
    departure_time: datetime
    return_time: datetime
    deep_link: str = ""


class HotelOffer(CamelModel):
    name: str
    price_total: int = Field(ge=0)
    rating: float | None = None
    deep_link: str = ""


class CreateTripOption(CamelModel):
    destination: str | None = None
    flight: FlightOffer
    hotel: HotelOffer
    score: float = 0.0
    explanation: str = ""


class FlightOptionResponse(CamelModel):
    id: uuid.UUID
    provider: str
    price: int
    departure_time: datetime
    return_time: datetime
    deep_link: str
    lock_status: LockStatus

    model_config = ConfigDict(from_attributes=True)


class HotelOptionResponse(CamelModel):
    id: uuid.UUID
    name: str
    price_total: int
    rating: float | None
    deep_link: str
    lock_status: LockStatus

    model_config = ConfigDict(from_attributes=True)


class TripOptionResponse(CamelModel):
    id: uuid.UUID
    trip_request_id: uuid.UUID | None
    destination: str
    total_cost: int
    remaining_budget: int
    activity_budget: int
    score: float
    explanation: str
    itinerary_json: list
    flight_option: FlightOptionResponse | None
    hotel_option: HotelOptionResponse | None
    activity_options: list[ActivityResponse]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TripRequestResponse(CamelModel):
    id: uuid.UUID
    origin_city: str
    destination: str | None
    start_date: date | None
    end_date: date | None
    number_of_days: int | None
    budget_total: int
    travel_style: TravelStyle
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TripRequestWithOptions(TripRequestResponse):
    trip_options: list[TripOptionResponse] = []
