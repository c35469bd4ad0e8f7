import pytest

from app.data.activity_catalog import available_destinations, get_catalog_for_destination
from app.schemas.activity import ActivityCandidate, ActivityCategory
from app.schemas.common import TravelStyle
from app.services.activity_service import STYLE_WEIGHTS, activity_service, score_activities
from app.services.errors import ValidationFailure


@pytest.mark.parametrize("destination", ["Paris", "Tokyo", "London", "New York", "Barcelona"])
@pytest.mark.parametrize("days", [1, 3, 7, 14])
@pytest.mark.parametrize("budget", [0, 2500, 10000, 30000, 1000000])
@pytest.mark.parametrize("style", [TravelStyle.BUDGET, TravelStyle.BALANCED])
def test_selection_stays_within_budget(destination, days, budget, style):
    selection = activity_service.select_activities(destination, days, budget, style)

    assert selection.total_cost == sum(a.price for a in selection.activities)
    assert selection.total_cost <= budget
    assert selection.remaining == budget - selection.total_cost
    assert len(selection.activities) <= min(days * 2, 10)

    cheapest = min(a.price for a in get_catalog_for_destination(destination))
    if cheapest <= budget:
        assert selection.activities


def test_paris_week_balanced_is_diverse():
    selection = activity_service.select_activities("Paris", 7, 30000, TravelStyle.BALANCED)

    assert selection.activities
    assert selection.total_cost <= 30000
    categories = {a.category for a in selection.activities}
    assert len(categories) > 1


@pytest.mark.parametrize("destination", ["Paris", "Tokyo", "London", "New York", "Barcelona"])
def test_selection_spans_categories_when_budget_allows(destination):
    selection = activity_service.select_activities(destination, 3, 100000, TravelStyle.BUDGET)
    assert len({a.category for a in selection.activities}) > 1


def test_unknown_destination_returns_empty_selection():
    selection = activity_service.select_activities("Atlantis", 5, 50000)
    assert selection.activities == []
    assert selection.total_cost == 0
    assert selection.remaining == 50000


def test_destination_lookup_is_case_insensitive():
    assert get_catalog_for_destination("new york") == get_catalog_for_destination("New York")
    assert get_catalog_for_destination(None) == []
    assert "Barcelona" in available_destinations()


def test_budget_style_prefers_cheaper_first_pick():
    budget_pick = activity_service.select_activities("Paris", 1, 100000, TravelStyle.BUDGET)
    balanced_pick = activity_service.select_activities("Paris", 1, 100000, TravelStyle.BALANCED)

    assert budget_pick.activities[0].name == "Montmartre Walking Tour"
    assert balanced_pick.activities[0].price >= budget_pick.activities[0].price


def test_soft_cap_scales_with_days():
    one_day = activity_service.select_activities("Paris", 1, 1000000)
    many_days = activity_service.select_activities("Paris", 30, 1000000)

    assert len(one_day.activities) == 2
    # capped by catalog size (7) before the global cap of 10
    assert len(many_days.activities) == 7


def test_max_activities_and_category_filter():
    selection = activity_service.select_activities(
        "Tokyo", 7, 1000000, categories=[ActivityCategory.TOUR], max_activities=1
    )
    assert len(selection.activities) == 1
    assert selection.activities[0].category == ActivityCategory.TOUR


def test_selection_is_deterministic():
    first = activity_service.select_activities("London", 4, 20000, TravelStyle.BALANCED)
    second = activity_service.select_activities("London", 4, 20000, TravelStyle.BALANCED)
    assert [a.name for a in first.activities] == [a.name for a in second.activities]


@pytest.mark.parametrize(
    "days,budget",
    [(0, 1000), (-1, 1000), (3, -1)],
)
def test_invalid_inputs_are_rejected(days, budget):
    with pytest.raises(ValidationFailure):
        activity_service.select_activities("Paris", days, budget)


def test_score_ties_break_on_price_then_name():
    candidates = [
        ActivityCandidate(name="B", category=ActivityCategory.TOUR, duration=150, price=1000, rating=4.0),
        ActivityCandidate(name="A", category=ActivityCategory.TOUR, duration=150, price=1000, rating=4.0),
    ]
    ranked = score_activities(candidates, STYLE_WEIGHTS[TravelStyle.BALANCED])
    assert [s.activity.name for s in ranked] == ["A", "B"]


def test_unrated_activity_scores_as_three_stars():
    rated = ActivityCandidate(name="R", category=ActivityCategory.TOUR, duration=150, price=1000, rating=3.0)
    unrated = ActivityCandidate(name="U", category=ActivityCategory.TOUR, duration=150, price=1000)
    ranked = score_activities([rated, unrated], STYLE_WEIGHTS[TravelStyle.BUDGET])
    assert ranked[0].score == ranked[1].score


def test_zero_max_activities_uses_default_cap():
    selection = activity_service.select_activities("Paris", 7, 30000, max_activities=0)
    default = activity_service.select_activities("Paris", 7, 30000)

    assert selection.activities
    assert [a.name for a in selection.activities] == [a.name for a in default.activities]


def test_negative_max_activities_rejected():
    with pytest.raises(ValidationFailure):
        activity_service.select_activities("Paris", 7, 30000, max_activities=-1)
