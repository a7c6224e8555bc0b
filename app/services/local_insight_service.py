"""현지 인사이트 도구 (get-local-insights).

모든 문구는 대륙/주 사용 언어/인프라 평점 기반의 고정 규칙 표로 결정됩니다.
"""

from __future__ import annotations

from app.core.errors import NotFoundError
from app.core.logger import get_logger
from app.schemas.insights import (
    CulturalInsights,
    LocalInsightsRequest,
    LocalInsightsResponse,
    PracticalTips,
)
from app.schemas.records import DestinationRecord
from app.services.context import ToolContext

logger = get_logger(__name__)

ALL_CATEGORIES = frozenset({"CUSTOMS", "ETIQUETTE", "MONEY", "SAFETY", "LANGUAGE", "TRANSPORTATION"})

_TIPPING_BY_CONTINENT = {
    "Europe": "Tipping is less common; 5-10% for excellent service",
    "Asia": "Tipping not expected in most places",
}
DEFAULT_TIPPING = "15-20% standard for restaurants and services"

_PHRASES = {
    "Spanish": {
        "Hello": "Hola",
        "Thank you": "Gracias",
        "How much?": "¿Cuánto cuesta?",
        "Where is?": "¿Dónde está?",
    },
}
_DEFAULT_PHRASES = {
    "Hello": "Hello",
    "Thank you": "Thank you",
    "How much?": "How much?",
    "Where is?": "Where is?",
}

DOS_AND_DONTS = [
    "Do respect local customs and traditions",
    "Don't photograph people without permission",
    "Do try local cuisine",
    "Don't litter or disrespect sacred sites",
]

COMMON_TOURIST_MISTAKES = [
    "Not booking popular attractions in advance",
    "Eating only at touristy restaurants on main streets",
    "Not allowing enough time between activities",
    "Overpacking - you can buy most things locally",
    "Not checking local holidays and closures",
]


def _primary_language(destination: DestinationRecord) -> str | None:
    return destination.languages_spoken[0] if destination.languages_spoken else None


def greeting_tip(destination: DestinationRecord) -> str:
    language = _primary_language(destination)
    if language == "English":
        return "English is widely spoken"
    return f"Learn basic {language or 'local'} phrases - locals appreciate the effort"


def tipping_custom(destination: DestinationRecord) -> str:
    return _TIPPING_BY_CONTINENT.get(destination.continent or "", DEFAULT_TIPPING)


def dress_code(destination: DestinationRecord) -> str:
    if "LUXURY" in destination.destination_type:
        return "Smart casual for dining, modest attire for religious sites"
    return "Casual dress acceptable, but dress modestly for religious sites"


def getting_around(destination: DestinationRecord) -> str:
    if destination.tourist_infrastructure_rating >= 4:
        return "Excellent public transportation available - metro, buses, and taxis"
    return "Taxis and ride-sharing apps are reliable and affordable"


def language_basics(destination: DestinationRecord) -> dict[str, str]:
    return dict(_PHRASES.get(_primary_language(destination) or "", _DEFAULT_PHRASES))


def money_saving_tips(destination: DestinationRecord) -> list[str]:
    months = destination.best_time_to_visit.months
    shoulder = months[-1] if months else "off-peak"
    return [
        "Eat where locals eat - cheaper and more authentic",
        "Use public transportation instead of taxis",
        "Buy tickets online for popular attractions to save time and money",
        f"Visit during shoulder season ({shoulder} onwards) for better deals",
    ]


def safety_considerations(destination: DestinationRecord) -> list[str]:
    return [
        f"Safety rating: {destination.safety_rating:g}/5 - generally safe for tourists",
        "Keep valuables secure and stay aware of surroundings",
        "Use licensed taxis or official ride-sharing apps",
        "Keep copies of important documents",
    ]


def insider_secrets(destination: DestinationRecord) -> list[str]:
    experience = destination.popular_activities[0] if destination.popular_activities else "explore local neighborhoods"
    return [
        "Visit popular attractions early morning to avoid crowds",
        "Ask hotel concierge for local restaurant recommendations",
        f"Best local experience: {experience}",
        "Download offline maps and translation apps before you go",
    ]


def get_local_insights(context: ToolContext, request: LocalInsightsRequest) -> LocalInsightsResponse:
    """문화/실용 정보를 반환합니다. `insight_categories`가 있으면 해당 블록만 채웁니다."""
    destination = context.repository.find_destination(request.destination)
    if destination is None:
        raise NotFoundError(f'Destination "{request.destination}" not found')

    categories = frozenset(request.insight_categories) if request.insight_categories else ALL_CATEGORIES

    def when(category: str, value):
        return value if category in categories else None

    cultural = CulturalInsights(
        greetings=greeting_tip(destination) if categories & {"CUSTOMS", "LANGUAGE"} else None,
        tipping_customs=tipping_custom(destination) if categories & {"CUSTOMS", "MONEY"} else None,
        dress_code=when("ETIQUETTE", dress_code(destination)),
        business_etiquette=when("ETIQUETTE", "Punctuality is appreciated, exchange business cards respectfully"),
        dos_and_donts=when("CUSTOMS", list(DOS_AND_DONTS)),
    )
    practical = PracticalTips(
        best_way_to_get_around=when("TRANSPORTATION", getting_around(destination)),
        money_saving_tips=when("MONEY", money_saving_tips(destination)),
        safety_considerations=when("SAFETY", safety_considerations(destination)),
        language_basics=when("LANGUAGE", language_basics(destination)),
    )

    logger.info("현지 인사이트: %s (categories=%s)", destination.city, ",".join(sorted(categories)))
    return LocalInsightsResponse(
        destination=destination.city,
        cultural_insights=cultural,
        practical_tips=practical,
        insider_secrets=insider_secrets(destination),
        common_tourist_mistakes=list(COMMON_TOURIST_MISTAKES),
    )
