"""Itinerary router — PDF download and JSON preview."""

import io
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.routers.responses import error_response, from_service_error, parse_id
from app.services.errors import TripPlannerError
from app.services.export_service import export_service
from app.services.itinerary_service import itinerary_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{trip_option_id}/download")
async def download_itinerary(trip_option_id: str, db: AsyncSession = Depends(get_db)):
    """Download the itinerary for a trip option as a PDF."""
    logger.info(f"Generating PDF for trip option {trip_option_id}")
    try:
        document = await itinerary_service.assemble_itinerary(
            db, parse_id(trip_option_id, "trip option id")
        )
        pdf_bytes = export_service.generate_itinerary_pdf(document)
    except TripPlannerError as e:
        logger.warning(f"Itinerary download failed for {trip_option_id}: {e.message}")
        return from_service_error(e)
    except Exception as e:
        logger.exception(f"Error generating PDF for trip option {trip_option_id}")
        return error_response(500, str(e) or "Failed to generate PDF")

    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": (
                f'attachment; filename="TripOptimizer-Itinerary-{trip_option_id}.pdf"'
            )
        },
    )


@router.get("/{trip_option_id}/preview")
async def preview_itinerary(trip_option_id: str, db: AsyncSession = Depends(get_db)):
    """Itinerary data as JSON, available before booking."""
    logger.info(f"Building itinerary preview for trip option {trip_option_id}")
    try:
        preview = await itinerary_service.build_preview(db, parse_id(trip_option_id, "trip option id"))
    except TripPlannerError as e:
        logger.warning(f"Itinerary preview failed for {trip_option_id}: {e.message}")
        return from_service_error(e)
    except Exception as e:
        logger.exception(f"Error building itinerary preview for trip option {trip_option_id}")
        return error_response(500, str(e) or "Failed to get itinerary preview")

    return {"success": True, "itinerary": preview.model_dump(mode="json", by_alias=True)}
