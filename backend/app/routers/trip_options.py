"""Trip option router — option detail and per-activity lock state."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.routers.responses import error_response, from_service_error, parse_id
from app.schemas.activity import ActivityLockRequest, ActivityResponse
from app.schemas.trip import TripOptionResponse
from app.services.activity_service import activity_service
from app.services.errors import TripPlannerError
from app.services.trip_service import trip_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{trip_option_id}", response_model=TripOptionResponse)
async def get_trip_option(trip_option_id: str, db: AsyncSession = Depends(get_db)):
    try:
        trip_option = await trip_service.get_trip_option(db, parse_id(trip_option_id, "trip option id"))
    except TripPlannerError as e:
        return from_service_error(e)
    if not trip_option:
        return error_response(404, "Trip option not found")
    return TripOptionResponse.model_validate(trip_option)


@router.get("/{trip_option_id}/activities", response_model=list[ActivityResponse])
async def list_activities(trip_option_id: str, db: AsyncSession = Depends(get_db)):
    """Activities attached to a trip option, in selection order."""
    try:
        option_id = parse_id(trip_option_id, "trip option id")
    except TripPlannerError as e:
        return from_service_error(e)
    if not await trip_service.get_trip_option(db, option_id):
        return error_response(404, "Trip option not found")
    activities = await activity_service.get_activities_for_trip_option(db, option_id)
    return [ActivityResponse.model_validate(a) for a in activities]


@router.patch("/{trip_option_id}/activities/{activity_id}/lock", response_model=ActivityResponse)
async def set_activity_lock(
    trip_option_id: str,
    activity_id: str,
    req: ActivityLockRequest,
    db: AsyncSession = Depends(get_db),
):
    """Pin an activity against replacement, or release it."""
    try:
        activity = await activity_service.set_activity_lock(
            db,
            parse_id(trip_option_id, "trip option id"),
            parse_id(activity_id, "activity id"),
            req.locked,
        )
    except TripPlannerError as e:
        logger.warning(f"Lock change failed for activity {activity_id} on {trip_option_id}: {e.message}")
        return from_service_error(e)
    return ActivityResponse.model_validate(activity)
