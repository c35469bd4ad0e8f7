from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TravelStyle(str, Enum):
    BUDGET = "BUDGET"
    BALANCED = "BALANCED"


class LockStatus(str, Enum):
    UNLOCKED = "UNLOCKED"
    LOCKED = "LOCKED"
    CONFIRMED = "CONFIRMED"
