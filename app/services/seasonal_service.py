"""계절 인사이트 도구 (get-seasonal-insights)."""

from __future__ import annotations

from app.core.calendar import month_index, month_key, month_of, season_of
from app.core.errors import NotFoundError
from app.core.logger import get_logger
from app.schemas.insights import (
    CrowdLevels,
    EventInfo,
    SeasonalInsightsRequest,
    SeasonalInsightsResponse,
    SeasonalOverview,
    WeatherInfo,
)
from app.schemas.records import SeasonalEventRecord
from app.services.context import ToolContext

logger = get_logger(__name__)

DEFAULT_TEMPERATURE_C = 20.0
WARM_THRESHOLD_C = 25
COOL_THRESHOLD_C = 15
EVENT_LIMIT = 5
MUST_ATTEND_RELEVANCE = 0.8


def describe_weather(temperature: float) -> str:
    """기온 구간(>25 / <15 / 그 외)에 따른 날씨 설명."""
    if temperature > WARM_THRESHOLD_C:
        return "Warm and sunny"
    if temperature < COOL_THRESHOLD_C:
        return "Cool and pleasant"
    return "Mild temperatures"


def overall_rating(is_best_time: bool, temperature: float) -> str:
    if is_best_time:
        return "Excellent"
    if temperature > 30 or temperature < 10:
        return "Fair"
    return "Good"


def packing_list(temperature: float) -> list[str]:
    if temperature > WARM_THRESHOLD_C:
        items = ["Light, breathable clothing", "Sunscreen and hat", "Sunglasses"]
    elif temperature < COOL_THRESHOLD_C:
        items = ["Warm layers", "Light jacket", "Comfortable walking shoes"]
    else:
        items = ["Versatile layers", "Light jacket for evenings", "Comfortable shoes"]
    return [*items, "Camera", "Reusable water bottle"]


def _event_info(event: SeasonalEventRecord) -> EventInfo:
    return EventInfo(
        event_name=event.event_name,
        event_type=event.event_type,
        dates=f"{event.start_date.isoformat()} - {event.end_date.isoformat()}",
        description=event.description or "",
        crowd_level=event.expected_crowd_level,
        why_attend=(
            "Must-attend event" if event.relevance_score > MUST_ATTEND_RELEVANCE else "Interesting cultural experience"
        ),
    )


def get_seasonal_insights(context: ToolContext, request: SeasonalInsightsRequest) -> SeasonalInsightsResponse:
    """지정한 달(기본: 이번 달)의 날씨, 행사, 혼잡도, 준비물을 반환합니다."""
    repository = context.repository
    destination = repository.find_destination(request.destination)
    if destination is None:
        raise NotFoundError(f'Destination "{request.destination}" not found')

    month = request.month or month_of(context.today())
    temperature = destination.temperature_for(month_key(month), DEFAULT_TEMPERATURE_C)
    is_best_time = month in destination.best_time_to_visit.months

    if is_best_time:
        why_visit_now = ["Optimal weather conditions", "Peak travel season with best experiences"]
    else:
        why_visit_now = ["Lower prices outside peak season", "Fewer crowds at popular attractions"]

    events: list[EventInfo] = []
    if request.include_events:
        events = [
            _event_info(event)
            for event in repository.list_seasonal_events(destination.id, month_index(month), limit=EVENT_LIMIT)
        ]
        if events:
            why_visit_now.append(f"{len(events)} special events happening")

    weather = None
    if request.include_weather:
        warm = temperature > WARM_THRESHOLD_C
        weather = WeatherInfo(
            average_temp_c=temperature,
            precipitation_mm=50 if warm else 100,
            humidity_percentage=70 if warm else 60,
            description=describe_weather(temperature),
        )

    logger.info("계절 인사이트: %s %s (best=%s, events=%d)", destination.city, month, is_best_time, len(events))
    return SeasonalInsightsResponse(
        seasonal_overview=SeasonalOverview(
            destination=destination.city,
            month=month,
            season=season_of(month),
            is_best_time=is_best_time,
            overall_rating=overall_rating(is_best_time, temperature),
            why_visit_now=why_visit_now,
        ),
        weather=weather,
        events=events,
        crowd_levels=CrowdLevels(
            tourist_volume="High" if is_best_time else "Moderate",
            hotel_availability="Limited - book early" if is_best_time else "Good availability",
            price_trends="Peak prices" if is_best_time else "Value season pricing",
        ),
        what_to_pack=packing_list(temperature),
        insider_tips=[
            "Book accommodations 2-3 months in advance" if is_best_time else "You can find great last-minute deals",
            "Download offline maps before you go",
            "Best time for photos: early morning or golden hour",
        ],
    )
