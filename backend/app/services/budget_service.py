"""Budget allocation — splits a trip budget into flight, hotel, buffer and activities."""

import math
from dataclasses import dataclass

from app.schemas.common import TravelStyle
from app.services.errors import ValidationFailure


@dataclass(frozen=True)
class BudgetSplit:
    flight_pct: float
    hotel_pct: float
    buffer_pct: float


BUDGET_SPLITS: dict[TravelStyle, BudgetSplit] = {
    TravelStyle.BUDGET: BudgetSplit(flight_pct=0.35, hotel_pct=0.35, buffer_pct=0.05),
    TravelStyle.BALANCED: BudgetSplit(flight_pct=0.35, hotel_pct=0.40, buffer_pct=0.02),
}


@dataclass
class BudgetAllocation:
    max_flight_budget: int
    max_hotel_budget: int
    buffer_amount: int
    activities_budget: int


def allocate_budget(budget_total: int, travel_style: TravelStyle | str) -> BudgetAllocation:
    """
    Allocate a total budget (cents) by travel style.

    Flight, hotel and buffer are floored percentages; activities get whatever
    remains, so the four parts always sum to budget_total.
    """
    if budget_total < 0:
        raise ValidationFailure("Budget must not be negative")

    split = BUDGET_SPLITS[TravelStyle(travel_style)]
    flight = math.floor(budget_total * split.flight_pct)
    hotel = math.floor(budget_total * split.hotel_pct)
    buffer = math.floor(budget_total * split.buffer_pct)

    return BudgetAllocation(
        max_flight_budget=flight,
        max_hotel_budget=hotel,
        buffer_amount=buffer,
        activities_budget=budget_total - flight - hotel - buffer,
    )
