"""여행지 비교 도구 (compare-destinations)."""

from __future__ import annotations

from collections.abc import Callable

from app.core.calendar import month_key, month_of
from app.core.errors import NotFoundError
from app.core.logger import get_logger
from app.schemas.compare import (
    DEFAULT_COMPARISON_CRITERIA,
    CompareRequest,
    CompareResponse,
    ComparisonMatrix,
    ComparisonRecommendation,
    CriterionRow,
)
from app.schemas.records import DestinationRecord
from app.services.context import ToolContext

logger = get_logger(__name__)

DEFAULT_DAILY_COST = 100.0
DEFAULT_TEMPERATURE_C = 20.0

# (비교 대상 목록, 기준 월 키) → 날씨 부문 추천 여행지
WeatherPick = Callable[[list[DestinationRecord], str], DestinationRecord]


def first_destination(destinations: list[DestinationRecord], month: str) -> DestinationRecord:
    """날씨 부문 기본 전략: 요청 순서상 첫 번째 여행지."""
    return destinations[0]


def _daily_cost(destination: DestinationRecord) -> float:
    return destination.average_daily_cost_usd or DEFAULT_DAILY_COST


def _min_by(destinations: list[DestinationRecord], key: Callable[[DestinationRecord], float]) -> DestinationRecord:
    # 동점이면 앞선 여행지
    best = destinations[0]
    for destination in destinations[1:]:
        if key(destination) < key(best):
            best = destination
    return best


def _max_by(destinations: list[DestinationRecord], key: Callable[[DestinationRecord], float]) -> DestinationRecord:
    best = destinations[0]
    for destination in destinations[1:]:
        if key(destination) > key(best):
            best = destination
    return best


def _cost_row(destinations: list[DestinationRecord], month: str) -> CriterionRow:
    return CriterionRow(
        criterion="Average Daily Cost",
        values={d.city: f"${_daily_cost(d):g}/day" for d in destinations},
        winner=_min_by(destinations, _daily_cost).city,
    )


def _weather_row(destinations: list[DestinationRecord], month: str) -> CriterionRow:
    return CriterionRow(
        criterion="Average Temperature (Current Month)",
        values={d.city: f"{d.temperature_for(month, DEFAULT_TEMPERATURE_C):g}°C" for d in destinations},
    )


def _activities_row(destinations: list[DestinationRecord], month: str) -> CriterionRow:
    return CriterionRow(
        criterion="Popular Activities",
        values={d.city: f"{len(d.popular_activities)} popular activities" for d in destinations},
        winner=_max_by(destinations, lambda d: len(d.popular_activities)).city,
    )


def _culture_row(destinations: list[DestinationRecord], month: str) -> CriterionRow:
    return CriterionRow(
        criterion="Destination Type",
        values={d.city: ", ".join(d.destination_type) or "General tourism" for d in destinations},
    )


def _food_row(destinations: list[DestinationRecord], month: str) -> CriterionRow:
    return CriterionRow(
        criterion="Local Cuisine",
        values={d.city: ", ".join(d.local_cuisine_highlights) or "Local cuisine" for d in destinations},
    )


def _family_row(destinations: list[DestinationRecord], month: str) -> CriterionRow:
    return CriterionRow(
        criterion="Family-Friendly",
        values={d.city: "Excellent" if "FAMILY" in d.destination_type else "Good" for d in destinations},
    )


_ROW_BUILDERS: dict[str, Callable[[list[DestinationRecord], str], CriterionRow]] = {
    "COST": _cost_row,
    "WEATHER": _weather_row,
    "ACTIVITIES": _activities_row,
    "CULTURE": _culture_row,
    "FOOD": _food_row,
    "FAMILY_FRIENDLY": _family_row,
}


def compare_destinations(
    context: ToolContext,
    request: CompareRequest,
    best_for_weather: WeatherPick = first_destination,
) -> CompareResponse:
    """2~4개 여행지를 기준별로 비교하고 부문별 추천을 반환합니다."""
    records = context.repository.find_destinations(request.destinations)
    by_name = {record.city.lower(): record for record in records}
    if any(name.lower() not in by_name for name in request.destinations):
        raise NotFoundError("One or more destinations not found")
    destinations = [by_name[name.lower()] for name in request.destinations]

    month = month_key(month_of(context.today()))
    criteria = list(dict.fromkeys(request.comparison_criteria or DEFAULT_COMPARISON_CRITERIA))
    rows = [_ROW_BUILDERS[criterion](destinations, month) for criterion in criteria]

    cultural = next((d for d in destinations if "CULTURAL" in d.destination_type), destinations[0])
    first = destinations[0].city

    logger.info("여행지 비교: %s (criteria=%s)", ", ".join(d.city for d in destinations), ",".join(criteria))
    return CompareResponse(
        comparison_matrix=ComparisonMatrix(destinations=[d.city for d in destinations], criteria=rows),
        recommendation=ComparisonRecommendation(
            best_for_budget=_min_by(destinations, _daily_cost).city,
            best_for_weather=best_for_weather(destinations, month).city,
            best_for_culture=cultural.city,
            overall_recommendation=(
                f"Based on your comparison, {first} offers a great balance of experiences. "
                "However, each destination has unique strengths worth considering."
            ),
        ),
    )
