"""맛집 추천 도구 (get-dining-recommendations)."""

from __future__ import annotations

from app.core.errors import NotFoundError
from app.core.logger import get_logger
from app.schemas.activities import DiningRequest, DiningResponse, FoodExperience, Restaurant
from app.schemas.records import PointOfInterestRecord
from app.services.context import ToolContext

logger = get_logger(__name__)

RESTAURANT_LIMIT = 15
INSIDER_TIP_MIN_RATING = 4.5

PRICE_SYMBOL_BY_LEVEL = {
    "BUDGET": "$",
    "MODERATE": "$$",
    "UPSCALE": "$$$",
    "FINE_DINING": "$$$$",
}

_BEST_FOR_BY_OCCASION = {
    "ROMANTIC": "Romantic dinners",
    "FAMILY": "Family gatherings",
    "BUSINESS": "Business lunches",
    "CELEBRATION": "Special celebrations",
}


def _best_for(poi: PointOfInterestRecord, occasion: str | None) -> str:
    if occasion in _BEST_FOR_BY_OCCASION:
        return _BEST_FOR_BY_OCCASION[occasion]
    if poi.price_level == "$$$$":
        return "Fine dining experiences"
    return "Casual dining"


def _atmosphere(poi: PointOfInterestRecord) -> str:
    if poi.price_level == "$$$$":
        return "Upscale and elegant"
    if poi.price_level == "$$$":
        return "Modern and stylish"
    if any(tag.upper() == "TRADITIONAL" for tag in poi.tags):
        return "Traditional and authentic"
    return "Casual and relaxed"


def _dress_code(poi: PointOfInterestRecord) -> str:
    if poi.price_level == "$$$$":
        return "Smart casual or formal"
    if poi.price_level == "$$$":
        return "Smart casual"
    return "Casual"


def _dietary_friendly(poi: PointOfInterestRecord, restrictions: list[str]) -> bool | None:
    """식이 제한이 카테고리/태그에 명시되어 있는지. 제한이 없으면 판단하지 않습니다."""
    if not restrictions:
        return None
    labels = {label.upper().replace(" ", "_") for label in [*poi.category, *poi.tags]}
    return all(restriction.upper().replace(" ", "_") in labels for restriction in restrictions)


def _to_restaurant(poi: PointOfInterestRecord, request: DiningRequest) -> Restaurant:
    cuisine = poi.category or ["International"]
    return Restaurant(
        name=poi.name,
        cuisine=cuisine,
        price_level=poi.price_level or "$$",
        rating=poi.rating,
        review_count=poi.review_count,
        description=poi.description or f"Excellent {cuisine[0].lower()} restaurant",
        best_for=_best_for(poi, request.occasion),
        atmosphere=_atmosphere(poi),
        dress_code=_dress_code(poi),
        reservation_required=poi.price_level in ("$$$", "$$$$"),
        dietary_friendly=_dietary_friendly(poi, request.dietary_restrictions),
        insider_tip=(
            "Book well in advance - very popular!"
            if poi.rating is not None and poi.rating >= INSIDER_TIP_MIN_RATING
            else None
        ),
        address=poi.address,
    )


def _food_experiences(city: str, country: str) -> list[FoodExperience]:
    return [
        FoodExperience(
            name=f"{city} Food Tour",
            description=f"Explore the culinary delights of {city} with a guided food tour featuring local specialties",
            price_usd=75,
            duration="3 hours",
        ),
        FoodExperience(
            name="Cooking Class",
            description=f"Learn to cook traditional {country} dishes with a local chef",
            price_usd=85,
            duration="3-4 hours",
        ),
        FoodExperience(
            name="Market Visit & Tasting",
            description="Visit local markets and sample fresh produce and street food",
            price_usd=45,
            duration="2 hours",
        ),
    ]


def get_dining_recommendations(context: ToolContext, request: DiningRequest) -> DiningResponse:
    """가격대와 선호 요리로 걸러낸 식당 목록과 미식 체험을 반환합니다."""
    repository = context.repository
    destination = repository.find_destination(request.destination)
    if destination is None:
        raise NotFoundError(f'Destination "{request.destination}" not found')

    price_levels = [PRICE_SYMBOL_BY_LEVEL[request.price_level]] if request.price_level else None
    restaurants = repository.list_points_of_interest(
        destination.id,
        poi_types=["RESTAURANT"],
        price_levels=price_levels,
        must_see_first=False,
    )

    cuisines = {cuisine.strip().upper() for cuisine in request.cuisine_preferences if cuisine.strip()}
    if cuisines:
        restaurants = [poi for poi in restaurants if cuisines.intersection(c.upper() for c in poi.category)]

    logger.info("맛집 조회: %s (%d건)", destination.city, len(restaurants[:RESTAURANT_LIMIT]))
    return DiningResponse(
        destination=destination.city,
        restaurants=[_to_restaurant(poi, request) for poi in restaurants[:RESTAURANT_LIMIT]],
        food_experiences=_food_experiences(destination.city, destination.country),
        local_specialties=destination.local_cuisine_highlights,
    )
