"""즐길 거리 / 맛집 추천 도구 스키마."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

ActivityType = Literal["ATTRACTIONS", "TOURS", "FOOD_DRINK", "OUTDOOR", "CULTURAL", "NIGHTLIFE", "SHOPPING"]
DiningPriceLevel = Literal["BUDGET", "MODERATE", "UPSCALE", "FINE_DINING"]
Occasion = Literal["CASUAL", "ROMANTIC", "FAMILY", "BUSINESS", "CELEBRATION"]
MealType = Literal["BREAKFAST", "LUNCH", "DINNER", "BRUNCH"]


class DateRange(BaseModel):
    start_date: date | None = None
    end_date: date | None = None


class ThingsToDoRequest(BaseModel):
    destination: str = Field(..., min_length=1, description="Destination city")
    activity_types: list[ActivityType] | None = Field(default=None)
    traveler_type: str | None = Field(default=None)
    date_range: DateRange | None = Field(default=None)
    budget_per_person: float | None = Field(default=None, ge=0)


class Availability(BaseModel):
    available: bool
    next_available: date
    slots_remaining: int


class Activity(BaseModel):
    name: str
    type: str
    description: str = ""
    rating: float | None = None
    review_count: int = 0
    price_level: str | None = None
    estimated_price_usd: float
    duration: str
    best_time: str
    must_see: bool
    address: str | None = None
    booking: Availability


class CuratedCollection(BaseModel):
    title: str
    description: str
    activities: list[str]


class ThingsToDoResponse(BaseModel):
    destination: str
    total_activities: int
    activities: list[Activity]
    curated_collections: list[CuratedCollection]


class DiningRequest(BaseModel):
    destination: str = Field(..., min_length=1)
    cuisine_preferences: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list)
    price_level: DiningPriceLevel | None = None
    occasion: Occasion | None = None
    meal_type: MealType | None = None


class Restaurant(BaseModel):
    name: str
    cuisine: list[str] = Field(default_factory=list)
    price_level: str | None = None
    rating: float | None = None
    review_count: int = 0
    description: str = ""
    best_for: str
    atmosphere: str
    dress_code: str
    reservation_required: bool
    dietary_friendly: bool | None = None
    insider_tip: str | None = None
    address: str | None = None


class FoodExperience(BaseModel):
    name: str
    description: str
    price_usd: float
    duration: str


class DiningResponse(BaseModel):
    destination: str
    restaurants: list[Restaurant]
    food_experiences: list[FoodExperience]
    local_specialties: list[str]
