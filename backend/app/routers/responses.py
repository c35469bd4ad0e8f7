"""Shared response envelope for router boundaries."""

import uuid

from fastapi.responses import JSONResponse

from app.services.errors import TripPlannerError, ValidationFailure


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def from_service_error(exc: TripPlannerError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


def parse_id(value: str, label: str = "id") -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        raise ValidationFailure(f"Invalid {label}: {value}")
