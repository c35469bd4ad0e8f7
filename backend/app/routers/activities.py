"""Activity catalog router — destinations and selection previews."""

from fastapi import APIRouter, Query

from app.data.activity_catalog import available_destinations
from app.routers.responses import from_service_error
from app.schemas.activity import ActivityCategory, ActivitySelection
from app.schemas.common import TravelStyle
from app.services.activity_service import activity_service
from app.services.errors import TripPlannerError

router = APIRouter()


@router.get("/destinations")
async def list_destinations():
    return {"destinations": available_destinations()}


@router.get("/{destination}/selection", response_model=ActivitySelection)
async def preview_selection(
    destination: str,
    days: int = Query(7),
    budget: int = Query(..., description="Activity budget in cents"),
    style: TravelStyle = Query(TravelStyle.BALANCED),
    categories: list[ActivityCategory] | None = Query(None),
    max_activities: int | None = Query(None, alias="maxActivities"),
):
    """Run the activity selector without persisting anything."""
    try:
        return activity_service.select_activities(
            destination=destination,
            number_of_days=days,
            activity_budget=budget,
            travel_style=style,
            categories=categories,
            max_activities=max_activities,
        )
    except TripPlannerError as e:
        return from_service_error(e)
