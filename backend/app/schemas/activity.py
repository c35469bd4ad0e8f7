import uuid
from datetime import datetime
from enum import Enum

from pydantic import ConfigDict, Field

from app.schemas.common import CamelModel, LockStatus


class ActivityCategory(str, Enum):
    TOUR = "TOUR"
    ATTRACTION = "ATTRACTION"
    EXPERIENCE = "EXPERIENCE"
    ADVENTURE = "ADVENTURE"
    ENTERTAINMENT = "ENTERTAINMENT"
    TRANSPORT = "TRANSPORT"


class ActivityCandidate(CamelModel):
    """An activity before it is attached to a trip option."""

    name: str
    category: ActivityCategory
    description: str = ""
    duration: int = Field(ge=0)  # minutes
    price: int = Field(ge=0)  # cents
    rating: float | None = None
    review_count: int | None = None
    deep_link: str = ""
    image_url: str | None = None


class ActivitySelection(CamelModel):
    activities: list[ActivityCandidate]
    total_cost: int
    remaining: int


class ActivityResponse(CamelModel):
    id: uuid.UUID
    name: str
    category: ActivityCategory
    description: str
    duration: int
    price: int
    rating: float | None
    review_count: int | None
    deep_link: str
    image_url: str | None
    lock_status: LockStatus
    locked_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class ActivityLockRequest(CamelModel):
    locked: bool = True
