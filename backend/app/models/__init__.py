from app.models.trip import FlightOption, HotelOption, TripOption, TripRequest
from app.models.activity import ActivityOption
from app.models.booking import Booking, Payment

__all__ = [
    "ActivityOption",
    "Booking",
    "FlightOption",
    "HotelOption",
    "Payment",
    "TripOption",
    "TripRequest",
]
