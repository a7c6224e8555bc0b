"""여행지 가이드 도구 (get-destination-guide)."""

from __future__ import annotations

from app.core.errors import NotFoundError
from app.core.logger import get_logger
from app.graph.content import ContentStrategy, TemplateHit, resolve_content
from app.schemas.guide import (
    DEFAULT_GUIDE_SECTIONS,
    AttractionItem,
    CultureSection,
    DiningSection,
    GeneratedIntroduction,
    GuideDestination,
    GuideRequest,
    GuideResponse,
    OverviewSection,
    PracticalInfoSection,
    QuickFacts,
    RestaurantItem,
    ThingsToDoSection,
    VenueItem,
    VenueSection,
)
from app.schemas.records import DestinationRecord, GuideRecord, PointOfInterestRecord
from app.services.context import ToolContext
from app.services.enrichment import EnrichmentPrompt

logger = get_logger(__name__)

MIN_INTRODUCTION_LENGTH = 100
MUST_SEE_COUNT = 5
ATTRACTION_LIMIT = 10
RESTAURANT_LIMIT = 8
VENUE_LIMIT = 8

# 가이드 섹션 → 저장된 가이드 유형
_SECTION_GUIDE_TYPES = {
    "OVERVIEW": "OVERVIEW",
    "THINGS_TO_DO": "THINGS_TO_DO",
    "DINING": "WHERE_TO_EAT",
    "NIGHTLIFE": "NIGHTLIFE",
    "SHOPPING": "SHOPPING",
    "CULTURE": "CULTURE",
    "PRACTICAL_INFO": "PRACTICAL_INFO",
}

DEFAULT_DINING_TIPS = [
    "Try local specialties at traditional restaurants",
    "Ask locals for recommendations",
    "Check restaurant hours - many close between lunch and dinner",
]
DEFAULT_NIGHTLIFE_TIPS = [
    "Nightlife starts late - most venues get busy after 11pm",
    "Keep an eye on your belongings in crowded venues",
]
DEFAULT_SHOPPING_TIPS = [
    "Local markets are best visited in the morning",
    "Ask about tax-free shopping for purchases over the minimum amount",
]

GUIDE_SYSTEM_PROMPT = (
    "You are an expert travel writer and destination specialist. "
    "Create engaging, accurate, and helpful travel content."
)


class OverviewIntroductionStrategy(ContentStrategy[str, GeneratedIntroduction]):
    """가이드 개요 섹션의 소개 문단 해석 전략.

    1단계는 여행지의 긴 설명 또는 게시된 OVERVIEW 가이드 본문(100자 이상),
    2단계는 생성 후 OVERVIEW 가이드로 저장, 3단계는 설명/명소로 문단을 조합합니다.
    """

    kind = "guide.overview"
    schema = GeneratedIntroduction

    def __init__(
        self,
        context: ToolContext,
        destination: DestinationRecord,
        overview_guide: GuideRecord | None,
        traveler_type: str | None = None,
        duration_days: int | None = None,
    ) -> None:
        self._context = context
        self._destination = destination
        self._overview_guide = overview_guide
        self._traveler_type = traveler_type
        self._duration_days = duration_days

    def lookup(self) -> TemplateHit[str] | None:
        long_description = (self._destination.long_description or "").strip()
        if len(long_description) >= MIN_INTRODUCTION_LENGTH:
            return TemplateHit(artifact=long_description)
        if self._overview_guide and len(self._overview_guide.content.strip()) >= MIN_INTRODUCTION_LENGTH:
            return TemplateHit(artifact=self._overview_guide.content.strip())
        return None

    def build_prompt(self) -> EnrichmentPrompt:
        destination = self._destination
        lines = [
            f"Create a comprehensive OVERVIEW introduction for {destination.city}, {destination.country}.",
        ]
        if self._traveler_type:
            lines.append(f"Target audience: {self._traveler_type} travelers")
        if self._duration_days:
            lines.append(f"Trip duration: {self._duration_days} days")
        if destination.famous_attractions:
            lines.append(f"Known attractions: {', '.join(destination.famous_attractions)}")
        if destination.short_description:
            lines.append(f"Known facts: {destination.short_description}")
        lines.extend(
            [
                "",
                "Requirements:",
                "- Write in an engaging, informative style",
                "- Include specific recommendations and local insights",
                "- Two or three paragraphs",
            ]
        )
        return EnrichmentPrompt(system=GUIDE_SYSTEM_PROMPT, user="\n".join(lines))

    def merge(self, generated: GeneratedIntroduction) -> str:
        return generated.introduction.strip()

    def persist(self, generated: GeneratedIntroduction, artifact: str) -> object:
        return self._context.repository.save_guide(
            self._destination.id,
            guide_type="OVERVIEW",
            title=f"{self._destination.city} Overview",
            content=artifact,
            highlights=generated.highlights,
            author="AI Travel Writer",
        )

    def fallback(self) -> str:
        destination = self._destination
        parts = [
            text.strip()
            for text in (destination.short_description, destination.long_description)
            if text and text.strip()
        ]
        if destination.famous_attractions:
            parts.append(f"Highlights include {', '.join(destination.famous_attractions[:3])}.")
        if destination.popular_activities:
            parts.append(f"Popular things to do: {', '.join(destination.popular_activities[:3])}.")
        if not parts:
            parts.append(f"{destination.city}, {destination.country} is a destination worth discovering.")
        return " ".join(parts)


def _quick_facts(destination: DestinationRecord) -> QuickFacts:
    return QuickFacts(
        language=", ".join(destination.languages_spoken),
        currency=destination.currency or "",
        timezone=destination.timezone or "",
        safety_rating=f"{destination.safety_rating:g}/5" if destination.safety_rating else "N/A",
        budget_level=destination.budget_level or "MODERATE",
        average_daily_cost=(
            f"${destination.average_daily_cost_usd:g}" if destination.average_daily_cost_usd else "N/A"
        ),
    )


def _attraction_item(poi: PointOfInterestRecord) -> AttractionItem:
    return AttractionItem(
        name=poi.name,
        description=poi.description or "",
        rating=poi.rating,
        price_level=poi.price_level,
        duration=f"{poi.visit_duration_minutes} minutes" if poi.visit_duration_minutes else "1-2 hours",
        best_time=poi.best_time_to_visit or "Morning to avoid crowds",
        must_see=poi.is_must_see,
    )


def _restaurant_item(poi: PointOfInterestRecord) -> RestaurantItem:
    return RestaurantItem(
        name=poi.name,
        cuisine=poi.category or ["Local cuisine"],
        price_level=poi.price_level or "$$",
        rating=poi.rating,
        highlights=poi.description or "",
    )


def _venue_item(poi: PointOfInterestRecord) -> VenueItem:
    return VenueItem(
        name=poi.name,
        description=poi.description or "",
        rating=poi.rating,
        price_level=poi.price_level,
        address=poi.address,
    )


def _build_practical_info(destination: DestinationRecord, guide: GuideRecord | None) -> PracticalInfoSection:
    if guide:
        getting_around = guide.content
    elif destination.tourist_infrastructure_rating >= 4:
        getting_around = "Excellent public transportation available - metro, buses, and taxis"
    else:
        getting_around = "Public transportation and taxis available"
    languages = ", ".join(destination.languages_spoken) or "the local language"
    return PracticalInfoSection(
        getting_around=getting_around,
        safety=f"Safety rating: {destination.safety_rating:g}/5. Keep valuables secure and stay aware of surroundings.",
        money=f"Local currency: {destination.currency or 'local currency'}. Credit cards widely accepted.",
        visa=destination.visa_requirements or "Check visa requirements for your nationality before travel",
        language=f"{languages} spoken here",
    )


def _seasonal_highlights(destination: DestinationRecord) -> list[str]:
    best_time = destination.best_time_to_visit
    highlights = [f"Best months: {month}" for month in best_time.months]
    if best_time.weather:
        highlights.append(f"Weather: {best_time.weather}")
    highlights.extend(f"Event: {event}" for event in best_time.events)
    return highlights


def get_destination_guide(context: ToolContext, request: GuideRequest) -> GuideResponse:
    """요청한 섹션으로 구성된 여행지 가이드를 반환합니다."""
    repository = context.repository
    destination = repository.find_destination(request.destination)
    if destination is None:
        raise NotFoundError(f'Destination "{request.destination}" not found')

    sections = list(dict.fromkeys(request.guide_sections or DEFAULT_GUIDE_SECTIONS))
    guide_types = [_SECTION_GUIDE_TYPES[section] for section in sections]
    guides: dict[str, GuideRecord] = {}
    for guide in repository.list_published_guides(destination.id, guide_types):
        guides.setdefault(guide.guide_type, guide)

    duration = request.duration_days or 3
    response = GuideResponse(
        destination=GuideDestination(
            name=destination.city,
            country=destination.country,
            description=destination.short_description or "",
            best_known_for=destination.famous_attractions,
            best_time_to_visit=destination.best_time_label(),
            average_trip_duration=f"{duration}-{duration + 2} days",
        ),
        seasonal_highlights=_seasonal_highlights(destination),
    )

    if "OVERVIEW" in sections:
        overview_guide = guides.get("OVERVIEW")
        strategy = OverviewIntroductionStrategy(
            context,
            destination,
            overview_guide,
            traveler_type=request.traveler_type,
            duration_days=request.duration_days,
        )
        resolved = resolve_content(
            strategy,
            context.enricher,
            context.writer,
            persist_generated=context.settings.ENABLE_CONTENT_CACHING,
        )
        response.overview = OverviewSection(
            introduction=resolved.artifact,
            why_visit=destination.destination_type,
            quick_facts=_quick_facts(destination),
            local_culture=destination.cultural_considerations or (overview_guide.content if overview_guide else ""),
            provenance=resolved.provenance,
        )

    if "THINGS_TO_DO" in sections:
        attractions = [
            _attraction_item(poi)
            for poi in repository.list_points_of_interest(
                destination.id, poi_types=["ATTRACTION"], limit=ATTRACTION_LIMIT
            )
        ]
        response.things_to_do = ThingsToDoSection(
            must_see=attractions[:MUST_SEE_COUNT],
            hidden_gems=attractions[MUST_SEE_COUNT:],
        )

    if "DINING" in sections:
        restaurants = repository.list_points_of_interest(
            destination.id, poi_types=["RESTAURANT"], must_see_first=False, limit=RESTAURANT_LIMIT
        )
        dining_guide = guides.get("WHERE_TO_EAT")
        response.dining = DiningSection(
            restaurants=[_restaurant_item(poi) for poi in restaurants],
            local_cuisine=destination.local_cuisine_highlights,
            tips=(dining_guide.tips if dining_guide and dining_guide.tips else list(DEFAULT_DINING_TIPS)),
        )

    for section, poi_type, default_tips in (
        ("NIGHTLIFE", "NIGHTLIFE", DEFAULT_NIGHTLIFE_TIPS),
        ("SHOPPING", "SHOPPING", DEFAULT_SHOPPING_TIPS),
    ):
        if section not in sections:
            continue
        venues = repository.list_points_of_interest(
            destination.id, poi_types=[poi_type], must_see_first=False, limit=VENUE_LIMIT
        )
        guide = guides.get(section)
        venue_section = VenueSection(
            venues=[_venue_item(poi) for poi in venues],
            tips=(guide.tips if guide and guide.tips else list(default_tips)),
        )
        setattr(response, section.lower(), venue_section)

    if "CULTURE" in sections:
        culture_guide = guides.get("CULTURE")
        response.culture = CultureSection(
            considerations=destination.cultural_considerations or (culture_guide.content if culture_guide else ""),
            languages=destination.languages_spoken,
            highlights=culture_guide.highlights if culture_guide else [],
        )

    if "PRACTICAL_INFO" in sections:
        response.practical_info = _build_practical_info(destination, guides.get("PRACTICAL_INFO"))

    used_guides = list(guides.values())
    response.insider_tips = list(dict.fromkeys(tip for guide in used_guides for tip in guide.tips))
    if used_guides:
        context.writer.submit(
            "guide.views",
            lambda: repository.increment_guide_views(guide.id for guide in used_guides),
        )

    logger.info("가이드 생성 완료: %s (sections=%s)", destination.city, ",".join(sections))
    return response
