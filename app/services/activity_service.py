"""즐길 거리 추천 도구 (get-things-to-do)."""

from __future__ import annotations

import re
from datetime import date, timedelta

from app.core.errors import NotFoundError
from app.core.logger import get_logger
from app.schemas.activities import (
    Activity,
    Availability,
    CuratedCollection,
    ThingsToDoRequest,
    ThingsToDoResponse,
)
from app.schemas.records import PointOfInterestRecord
from app.services.context import ToolContext

logger = get_logger(__name__)

ACTIVITY_LIMIT = 20
MUST_DO_LIMIT = 10
BUDGET_FRIENDLY_LIMIT = 8
BUDGET_FRIENDLY_MAX_PRICE = 20
FAMILY_LIMIT = 8
ROMANTIC_LIMIT = 6
FOOD_LIMIT = 8

# 활동 유형 → POI 유형
_POI_TYPES_BY_ACTIVITY = {
    "ATTRACTIONS": ("ATTRACTION",),
    "CULTURAL": ("ATTRACTION",),
    "TOURS": ("ACTIVITY",),
    "OUTDOOR": ("ACTIVITY",),
    "FOOD_DRINK": ("RESTAURANT",),
    "NIGHTLIFE": ("NIGHTLIFE",),
    "SHOPPING": ("SHOPPING",),
}

# 가격 등급 → 1인 예상 가격(USD)
PRICE_BY_LEVEL = {"FREE": 0.0, "$": 15.0, "$$": 35.0, "$$$": 75.0, "$$$$": 150.0}
DEFAULT_PRICE_LEVEL = "$$"

_ROMANTIC_PATTERN = re.compile(r"romantic|sunset|dinner|wine", re.IGNORECASE)


def affordable_price_levels(budget_per_person: float) -> list[str]:
    """1인 예산으로 감당 가능한 가격 등급. FREE와 `$`는 항상 포함됩니다."""
    levels = ["FREE", "$"]
    if budget_per_person >= 20:
        levels.append("$$")
    if budget_per_person >= 50:
        levels.append("$$$")
    if budget_per_person >= 100:
        levels.append("$$$$")
    return levels


def estimate_price(price_level: str | None) -> float:
    return PRICE_BY_LEVEL.get(price_level or DEFAULT_PRICE_LEVEL, PRICE_BY_LEVEL[DEFAULT_PRICE_LEVEL])


def _availability(poi: PointOfInterestRecord, start: date) -> Availability:
    """리뷰 수에서 결정적으로 유도한 예약 가능 정보."""
    return Availability(available=True, next_available=start, slots_remaining=5 + poi.review_count % 20)


def _to_activity(poi: PointOfInterestRecord, city: str, start: date) -> Activity:
    return Activity(
        name=poi.name,
        type=poi.poi_type,
        description=poi.description or f"Experience {poi.name} in {city}",
        rating=poi.rating,
        review_count=poi.review_count,
        price_level=poi.price_level,
        estimated_price_usd=estimate_price(poi.price_level),
        duration=f"{poi.visit_duration_minutes} minutes" if poi.visit_duration_minutes else "2-3 hours",
        best_time=poi.best_time_to_visit or "Morning to avoid crowds",
        must_see=poi.is_must_see,
        address=poi.address,
        booking=_availability(poi, start),
    )


def _curated_collections(
    pois: list[PointOfInterestRecord],
    activities: list[Activity],
    traveler_type: str | None,
) -> list[CuratedCollection]:
    collections: list[CuratedCollection] = []

    must_do = [activity.name for activity in activities if activity.must_see][:MUST_DO_LIMIT]
    if must_do:
        collections.append(
            CuratedCollection(
                title="Top 10 Must-Do Experiences",
                description="The experiences no visit is complete without",
                activities=must_do,
            )
        )

    budget_friendly = [
        activity.name for activity in activities if activity.estimated_price_usd <= BUDGET_FRIENDLY_MAX_PRICE
    ][:BUDGET_FRIENDLY_LIMIT]
    if budget_friendly:
        collections.append(
            CuratedCollection(
                title="Budget-Friendly Activities",
                description=f"Great experiences for ${BUDGET_FRIENDLY_MAX_PRICE} or less",
                activities=budget_friendly,
            )
        )

    audience = (traveler_type or "").upper()
    if audience in ("FAMILY", "FAMILIES"):
        family = [activity.name for activity in activities if activity.type != "NIGHTLIFE"][:FAMILY_LIMIT]
        if family:
            collections.append(
                CuratedCollection(
                    title="Perfect for Families",
                    description="Activities the whole family can enjoy",
                    activities=family,
                )
            )

    if audience in ("COUPLE", "COUPLES"):
        romantic = [
            poi.name for poi in pois if any(_ROMANTIC_PATTERN.search(tag) for tag in poi.tags)
        ][:ROMANTIC_LIMIT]
        if romantic:
            collections.append(
                CuratedCollection(
                    title="Romantic Experiences",
                    description="Moments to share together",
                    activities=romantic,
                )
            )

    food = [activity.name for activity in activities if activity.type == "RESTAURANT"][:FOOD_LIMIT]
    if food:
        collections.append(
            CuratedCollection(
                title="Food & Culinary Experiences",
                description="Taste the local flavors",
                activities=food,
            )
        )
    return collections


def get_things_to_do(context: ToolContext, request: ThingsToDoRequest) -> ThingsToDoResponse:
    """활동 유형과 예산으로 걸러낸 즐길 거리와 큐레이션 목록을 반환합니다."""
    repository = context.repository
    destination = repository.find_destination(request.destination)
    if destination is None:
        raise NotFoundError(f'Destination "{request.destination}" not found')

    poi_types = None
    if request.activity_types:
        mapped = (poi_type for activity in request.activity_types for poi_type in _POI_TYPES_BY_ACTIVITY[activity])
        poi_types = list(dict.fromkeys(mapped))
    price_levels = (
        affordable_price_levels(request.budget_per_person) if request.budget_per_person is not None else None
    )

    pois = repository.list_points_of_interest(
        destination.id,
        poi_types=poi_types,
        price_levels=price_levels,
        limit=ACTIVITY_LIMIT,
    )

    date_range = request.date_range
    start = date_range.start_date if date_range and date_range.start_date else context.today() + timedelta(days=1)
    activities = [_to_activity(poi, destination.city, start) for poi in pois]

    logger.info("즐길 거리 조회: %s (%d건)", destination.city, len(activities))
    return ThingsToDoResponse(
        destination=destination.city,
        total_activities=len(activities),
        activities=activities,
        curated_collections=_curated_collections(pois, activities, request.traveler_type),
    )
