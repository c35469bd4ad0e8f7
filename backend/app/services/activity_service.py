"""Activity service — picks a budget-bounded, category-diverse set of activities per trip option."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.data.activity_catalog import get_catalog_for_destination
from app.models.activity import ActivityOption
from app.schemas.activity import ActivityCandidate, ActivityCategory, ActivitySelection
from app.schemas.common import LockStatus, TravelStyle
from app.services.errors import NotFoundError, ValidationFailure

logger = logging.getLogger(__name__)

IDEAL_DURATION_MINUTES = 150
DEFAULT_RATING = 3.0
MAX_RATING = 5.0


@dataclass
class ActivityWeights:
    price: float
    rating: float
    duration: float


STYLE_WEIGHTS: dict[TravelStyle, ActivityWeights] = {
    TravelStyle.BUDGET: ActivityWeights(price=0.6, rating=0.3, duration=0.1),
    TravelStyle.BALANCED: ActivityWeights(price=0.25, rating=0.6, duration=0.15),
}


@dataclass
class ScoredActivity:
    activity: ActivityCandidate
    score: float


def score_activities(
    activities: list[ActivityCandidate], weights: ActivityWeights
) -> list[ScoredActivity]:
    """
    Score candidates 0-1 and rank them.

    Price is inverted and normalized across the candidate set, rating is
    normalized to the 0-5 scale (unrated counts as 3), and duration rewards
    closeness to a 2.5 hour outing. Ties break on lower price, then name.
    """
    if not activities:
        return []

    prices = [a.price for a in activities]
    min_price = min(prices)
    price_range = (max(prices) - min_price) or 1
    max_duration = max(a.duration for a in activities) or 1

    scored = []
    for activity in activities:
        price_score = 1.0 - (activity.price - min_price) / price_range
        rating = activity.rating if activity.rating is not None else DEFAULT_RATING
        rating_score = rating / MAX_RATING
        duration_gap = abs(activity.duration - IDEAL_DURATION_MINUTES)
        duration_score = 1.0 - min(duration_gap / max_duration, 1.0)

        composite = (
            weights.price * price_score
            + weights.rating * rating_score
            + weights.duration * duration_score
        )
        scored.append(ScoredActivity(activity=activity, score=round(composite, 6)))

    scored.sort(key=lambda s: (-s.score, s.activity.price, s.activity.name))
    return scored


class ActivityService:
    """Selects activities from the catalog and persists them against trip options."""

    def activity_limit(self, number_of_days: int, max_activities: int | None = None) -> int:
        """An unset or zero max_activities means the per-day default."""
        if max_activities:
            return max_activities
        return min(number_of_days * settings.activities_per_day, settings.max_activities)

    def select_activities(
        self,
        destination: str | None,
        number_of_days: int,
        activity_budget: int,
        travel_style: TravelStyle | str = TravelStyle.BALANCED,
        categories: list[ActivityCategory] | None = None,
        max_activities: int | None = None,
    ) -> ActivitySelection:
        """
        Greedy selection within budget.

        Each round takes the best-ranked affordable candidate from a category
        not yet picked, falling back to the best-ranked affordable candidate of
        any category. Stops at the per-trip cap or when nothing else fits.
        """
        if activity_budget < 0:
            raise ValidationFailure("Activity budget must not be negative")
        if number_of_days < 1:
            raise ValidationFailure("Number of days must be at least 1")
        if max_activities is not None and max_activities < 0:
            raise ValidationFailure("max_activities must not be negative")

        candidates = get_catalog_for_destination(destination)
        if categories:
            wanted = set(categories)
            candidates = [a for a in candidates if a.category in wanted]
        candidates = [a for a in candidates if a.price <= activity_budget]

        if not candidates:
            logger.info(f"No activities fit for {destination!r} within {activity_budget}")
            return ActivitySelection(activities=[], total_cost=0, remaining=activity_budget)

        ranked = score_activities(candidates, STYLE_WEIGHTS[TravelStyle(travel_style)])
        limit = self.activity_limit(number_of_days, max_activities)

        selected: list[ActivityCandidate] = []
        seen_categories: set[ActivityCategory] = set()
        remaining = activity_budget

        while ranked and len(selected) < limit:
            affordable = [s for s in ranked if s.activity.price <= remaining]
            if not affordable:
                break
            pick = next(
                (s for s in affordable if s.activity.category not in seen_categories),
                affordable[0],
            )
            ranked.remove(pick)
            selected.append(pick.activity)
            seen_categories.add(pick.activity.category)
            remaining -= pick.activity.price

        total_cost = sum(a.price for a in selected)
        logger.info(
            f"Selected {len(selected)} activities for {destination} "
            f"({len(seen_categories)} categories, {total_cost}/{activity_budget})"
        )
        return ActivitySelection(
            activities=selected,
            total_cost=total_cost,
            remaining=activity_budget - total_cost,
        )

    async def create_activity_options(
        self,
        db: AsyncSession,
        trip_option_id: uuid.UUID,
        activities: list[ActivityCandidate],
    ) -> list[ActivityOption]:
        """Persist activities for a trip option, unlocked, in the given order."""
        rows = [
            ActivityOption(
                trip_option_id=trip_option_id,
                position=index,
                name=activity.name,
                category=activity.category.value,
                description=activity.description,
                duration=activity.duration,
                price=activity.price,
                rating=activity.rating,
                review_count=activity.review_count,
                deep_link=activity.deep_link,
                image_url=activity.image_url,
                lock_status=LockStatus.UNLOCKED.value,
                locked_at=None,
            )
            for index, activity in enumerate(activities)
        ]
        db.add_all(rows)
        await db.commit()
        return rows

    async def get_activities_for_trip_option(
        self, db: AsyncSession, trip_option_id: uuid.UUID
    ) -> list[ActivityOption]:
        result = await db.execute(
            select(ActivityOption)
            .where(ActivityOption.trip_option_id == trip_option_id)
            .order_by(ActivityOption.position)
        )
        return list(result.scalars().all())

    async def get_total_activity_cost(self, db: AsyncSession, trip_option_id: uuid.UUID) -> int:
        activities = await self.get_activities_for_trip_option(db, trip_option_id)
        return sum(a.price for a in activities)

    async def set_activity_lock(
        self,
        db: AsyncSession,
        trip_option_id: uuid.UUID,
        activity_id: uuid.UUID,
        locked: bool,
    ) -> ActivityOption:
        """Pin or unpin an activity against replacement. Confirmed activities are final."""
        result = await db.execute(
            select(ActivityOption).where(
                ActivityOption.id == activity_id,
                ActivityOption.trip_option_id == trip_option_id,
            )
        )
        activity = result.scalar_one_or_none()
        if not activity:
            raise NotFoundError("Activity not found")
        if activity.lock_status == LockStatus.CONFIRMED.value:
            raise ValidationFailure("Activity is confirmed and cannot be changed")

        if locked:
            activity.lock_status = LockStatus.LOCKED.value
            activity.locked_at = datetime.now(timezone.utc)
        else:
            activity.lock_status = LockStatus.UNLOCKED.value
            activity.locked_at = None
        await db.commit()
        return activity


activity_service = ActivityService()
