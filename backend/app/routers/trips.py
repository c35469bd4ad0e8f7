import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.routers.responses import error_response, from_service_error, parse_id
from app.schemas.trip import (
    CreateTripOption,
    CreateTripRequest,
    TripOptionResponse,
    TripRequestResponse,
    TripRequestWithOptions,
)
from app.services.errors import TripPlannerError
from app.services.trip_service import trip_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", status_code=201, response_model=TripRequestResponse)
async def create_trip_request(req: CreateTripRequest, db: AsyncSession = Depends(get_db)):
    """Record a trip search (origin, destination, dates, budget, style)."""
    trip_request = await trip_service.create_trip_request(db, req)
    return TripRequestResponse.model_validate(trip_request)


@router.get("/{trip_request_id}", response_model=TripRequestWithOptions)
async def get_trip_request(trip_request_id: str, db: AsyncSession = Depends(get_db)):
    """Trip request with its options, best score first."""
    try:
        trip_request = await trip_service.get_trip_request_with_options(
            db, parse_id(trip_request_id, "trip request id")
        )
    except TripPlannerError as e:
        return from_service_error(e)
    if not trip_request:
        return error_response(404, "Trip request not found")
    return TripRequestWithOptions.model_validate(trip_request)


@router.post("/{trip_request_id}/options", status_code=201, response_model=TripOptionResponse)
async def create_trip_option(
    trip_request_id: str,
    req: CreateTripOption,
    db: AsyncSession = Depends(get_db),
):
    """Assemble and persist a trip option from a chosen flight and hotel offer."""
    try:
        trip_request = await trip_service.get_trip_request(
            db, parse_id(trip_request_id, "trip request id")
        )
        if not trip_request:
            return error_response(404, "Trip request not found")
        trip_option = await trip_service.create_trip_option(db, trip_request, req)
    except TripPlannerError as e:
        logger.warning(f"Trip option creation failed for request {trip_request_id}: {e.message}")
        return from_service_error(e)
    return TripOptionResponse.model_validate(trip_option)
