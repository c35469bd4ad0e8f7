import pytest

from app.schemas.common import TravelStyle
from app.services.budget_service import allocate_budget
from app.services.errors import ValidationFailure


def test_balanced_split():
    allocation = allocate_budget(100000, TravelStyle.BALANCED)
    assert allocation.max_flight_budget == 35000
    assert allocation.max_hotel_budget == 40000
    assert allocation.buffer_amount == 2000
    assert allocation.activities_budget == 23000


def test_budget_split_accepts_plain_string_style():
    allocation = allocate_budget(100000, "BUDGET")
    assert allocation.max_flight_budget == 35000
    assert allocation.max_hotel_budget == 35000
    assert allocation.buffer_amount == 5000
    assert allocation.activities_budget == 25000


@pytest.mark.parametrize("total", [0, 1, 99, 12345, 999999])
@pytest.mark.parametrize("style", list(TravelStyle))
def test_parts_always_sum_to_total(total, style):
    a = allocate_budget(total, style)
    assert a.max_flight_budget + a.max_hotel_budget + a.buffer_amount + a.activities_budget == total
    assert a.activities_budget >= 0


def test_negative_budget_rejected():
    with pytest.raises(ValidationFailure):
        allocate_budget(-1, TravelStyle.BALANCED)
