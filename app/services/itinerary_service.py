"""맞춤 일정 생성 도구 (generate-personalized-itinerary)."""

from __future__ import annotations

import json

from app.core.errors import NotFoundError
from app.core.logger import get_logger
from app.graph.content import ContentStrategy, TemplateHit, resolve_content
from app.schemas.itinerary import (
    BudgetBreakdown,
    GeneratedItinerary,
    ItineraryRequest,
    ItineraryResponse,
    ItinerarySummary,
)
from app.schemas.records import (
    DaySchedule,
    DestinationRecord,
    ItineraryTemplateRecord,
    Meals,
    SlotPlan,
)
from app.services.context import ToolContext
from app.services.enrichment import EnrichmentPrompt

logger = get_logger(__name__)

DEFAULT_DAILY_COST = 100.0
FALLBACK_WALKING_KM = 5.0

# 여행자 유형 → 템플릿 대상 구분
_AUDIENCE_BY_TRAVELER_TYPE = {
    "COUPLE": "COUPLES",
    "FAMILY": "FAMILIES",
    "GROUP": "GROUPS",
    "SOLO": "SOLO",
    "BUSINESS": "BUSINESS",
}

# 여행 속도 → 템플릿 여행 스타일
_TRIP_STYLE_BY_PACE = {
    "RELAXED": "RELAXED",
    "MODERATE": "BALANCED",
    "PACKED": "PACKED",
}

DEFAULT_PACKING_LIST = [
    "Comfortable walking shoes",
    "Weather-appropriate clothing",
    "Camera",
    "Travel documents",
]

ITINERARY_SYSTEM_PROMPT = (
    "You are an expert travel planner. Create detailed, personalized itineraries. "
    "Always respond with valid JSON only."
)


def normalize_audience(traveler_type: str | None) -> str | None:
    """요청의 여행자 유형을 템플릿 대상 구분으로 변환합니다."""
    if not traveler_type:
        return None
    key = traveler_type.strip().upper()
    return _AUDIENCE_BY_TRAVELER_TYPE.get(key, key)


def default_budget_breakdown(destination: DestinationRecord) -> BudgetBreakdown:
    daily_cost = destination.average_daily_cost_usd or DEFAULT_DAILY_COST
    return BudgetBreakdown(
        meals=round(daily_cost * 0.4),
        activities=round(daily_cost * 0.4),
        transportation=round(daily_cost * 0.2),
        total_per_day=daily_cost,
    )


class ItineraryStrategy(ContentStrategy[ItineraryResponse, GeneratedItinerary]):
    """일정 해석 전략. 구조 키는 (여행지, 일수, 대상)입니다."""

    kind = "itinerary"
    schema = GeneratedItinerary

    def __init__(self, context: ToolContext, destination: DestinationRecord, request: ItineraryRequest) -> None:
        self._context = context
        self._destination = destination
        self._request = request
        self._profile = request.traveler_profile
        self._audience = normalize_audience(self._profile.traveler_type if self._profile else None)

    @property
    def _days(self) -> int:
        return self._request.duration_days

    @property
    def _trip_style(self) -> str:
        pace = self._profile.pace_preference if self._profile else None
        return _TRIP_STYLE_BY_PACE.get(pace or "", "BALANCED")

    def _summary(self, travel_style: str, overview: str) -> ItinerarySummary:
        dates = self._request.travel_dates
        return ItinerarySummary(
            destination=self._destination.city,
            total_days=self._days,
            travel_style=travel_style,
            overview=overview,
            arrival_date=dates.arrival_date if dates else None,
            departure_date=dates.departure_date if dates else None,
        )

    def _template_response(self, template: ItineraryTemplateRecord) -> ItineraryResponse:
        budget = (
            BudgetBreakdown.model_validate(template.budget_breakdown)
            if template.budget_breakdown
            else default_budget_breakdown(self._destination)
        )
        overview = (
            f"Experience the best of {self._destination.city} in {self._days} days "
            f"with this {template.trip_style.lower()} itinerary."
        )
        return ItineraryResponse(
            itinerary=self._summary(template.trip_style, overview),
            daily_schedule=template.daily_schedule,
            packing_list=template.packing_list,
            budget_breakdown=budget,
            provenance="TEMPLATE",
        )

    def lookup(self) -> TemplateHit[ItineraryResponse] | None:
        repository = self._context.repository
        template = repository.find_itinerary_template(self._destination.id, self._days, self._audience)
        if template is None:
            return None
        logger.info("일정 템플릿 재사용: %s (usage=%d)", template.template_name, template.usage_count)
        return TemplateHit(
            artifact=self._template_response(template),
            on_reuse=lambda: repository.increment_template_usage(template.id),
        )

    def build_prompt(self) -> EnrichmentPrompt:
        destination = self._destination
        profile = self._profile.model_dump(exclude_none=True) if self._profile else {}
        profile.update(
            {
                "budget": destination.average_daily_cost_usd,
                "destination_type": destination.destination_type,
                "popular_activities": destination.popular_activities,
            }
        )
        must_see = (self._profile.must_see_attractions if self._profile else []) or destination.famous_attractions[:5]

        lines = [
            f"Create a detailed {self._days}-day itinerary for {destination.city}, {destination.country}.",
            "",
            "Traveler Profile:",
            json.dumps(profile, ensure_ascii=False, indent=2),
        ]
        if must_see:
            lines.append(f"Must-see attractions: {', '.join(must_see)}")
        lines.extend(
            [
                "",
                f"The daily_schedule must contain exactly {self._days} days numbered 1 to {self._days}.",
                "Each day needs morning, afternoon and evening slots, meals, estimated_cost and walking_distance_km.",
            ]
        )
        return EnrichmentPrompt(system=ITINERARY_SYSTEM_PROMPT, user="\n".join(lines))

    def merge(self, generated: GeneratedItinerary) -> ItineraryResponse:
        days = [day.day for day in generated.daily_schedule]
        if days != list(range(1, self._days + 1)):
            raise ValueError(f"expected days 1..{self._days}, got {days}")

        return ItineraryResponse(
            itinerary=self._summary(self._trip_style, generated.overview),
            daily_schedule=generated.daily_schedule,
            alternative_options=[option for option in generated.alternative_options if option.day <= self._days],
            packing_list=generated.packing_list or list(DEFAULT_PACKING_LIST),
            budget_breakdown=default_budget_breakdown(self._destination),
            provenance="GENERATED",
        )

    def persist(self, generated: GeneratedItinerary, artifact: ItineraryResponse) -> object:
        traveler_type = self._profile.traveler_type if self._profile else None
        budget = artifact.budget_breakdown
        return self._context.repository.save_itinerary_template(
            self._destination.id,
            template_name=f"AI-Generated {self._days}-Day {traveler_type or 'General'} Itinerary",
            duration_days=self._days,
            trip_style=artifact.itinerary.travel_style,
            target_audience=self._audience or "GENERAL",
            daily_schedule=artifact.daily_schedule,
            estimated_cost_usd=budget.total_per_day * self._days,
            packing_list=artifact.packing_list,
            budget_breakdown=budget.model_dump(exclude_none=True),
        )

    def fallback(self) -> ItineraryResponse:
        destination = self._destination
        attractions = list(dict.fromkeys((self._profile.must_see_attractions if self._profile else []) or []))
        attractions += [name for name in destination.famous_attractions if name not in attractions]
        cuisine = destination.local_cuisine_highlights
        daily_cost = destination.average_daily_cost_usd or DEFAULT_DAILY_COST

        def attraction_at(index: int, default: str) -> str:
            return attractions[index % len(attractions)] if attractions else default

        schedule = []
        for offset in range(self._days):
            day = offset + 1
            schedule.append(
                DaySchedule(
                    day=day,
                    theme="Arrival & City Introduction" if day == 1 else f"Day {day} Exploration",
                    morning=SlotPlan(
                        activity=attraction_at(offset * 2, "Explore local area"),
                        location=destination.city,
                        duration="2-3 hours",
                        why_this="Popular attraction",
                        tips=["Arrive early", "Book tickets in advance"],
                    ),
                    afternoon=SlotPlan(
                        activity=attraction_at(offset * 2 + 1, "Local cuisine exploration"),
                        location=destination.city,
                        duration="3-4 hours",
                        why_this="Must-see experience",
                        tips=["Take your time", "Enjoy the experience"],
                    ),
                    evening=SlotPlan(
                        activity="Dinner and local nightlife",
                        location=destination.city,
                        duration="2-3 hours",
                        why_this="Experience local culture",
                        tips=["Try local specialties", "Ask locals for recommendations"],
                    ),
                    meals=Meals(
                        breakfast="Hotel or local café",
                        lunch=f"Try {cuisine[offset % len(cuisine)]}" if cuisine else "Local restaurant",
                        dinner="Traditional cuisine",
                    ),
                    estimated_cost=daily_cost,
                    walking_distance_km=FALLBACK_WALKING_KM,
                )
            )

        overview = (
            f"Explore {destination.city} at your own pace. "
            f"This {self._days}-day itinerary covers the highlights."
        )
        return ItineraryResponse(
            itinerary=self._summary(self._trip_style, overview),
            daily_schedule=schedule,
            packing_list=list(DEFAULT_PACKING_LIST),
            budget_breakdown=default_budget_breakdown(destination),
            provenance="FALLBACK",
        )


def generate_personalized_itinerary(context: ToolContext, request: ItineraryRequest) -> ItineraryResponse:
    """여행지와 일수에 맞는 일정을 템플릿 → 생성 → 폴백 순으로 해석합니다."""
    destination = context.repository.find_destination(request.destination)
    if destination is None:
        raise NotFoundError(f'Destination "{request.destination}" not found')

    resolved = resolve_content(
        ItineraryStrategy(context, destination, request),
        context.enricher,
        context.writer,
        persist_generated=context.settings.ENABLE_CONTENT_CACHING,
    )
    logger.info("일정 해석 완료: %s %d일 (%s)", destination.city, request.duration_days, resolved.provenance)
    return resolved.artifact
