"""여행지 가이드 도구 스키마."""

from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.records import Provenance

GuideSection = Literal["OVERVIEW", "THINGS_TO_DO", "DINING", "NIGHTLIFE", "SHOPPING", "CULTURE", "PRACTICAL_INFO"]
TravelerType = Literal["FAMILY", "COUPLE", "SOLO", "BUSINESS", "GROUP"]

DEFAULT_GUIDE_SECTIONS: tuple[GuideSection, ...] = ("OVERVIEW", "THINGS_TO_DO", "DINING")


class GuideRequest(BaseModel):
    destination: str = Field(..., min_length=1, description="City or destination name")
    guide_sections: list[GuideSection] | None = Field(default=None, description="Sections to include in the guide")
    traveler_type: TravelerType | None = Field(default=None, description="Customize content for traveler type")
    duration_days: int | None = Field(default=None, ge=1, le=30, description="Trip duration for context")


class GuideDestination(BaseModel):
    name: str
    country: str
    description: str = ""
    best_known_for: list[str] = Field(default_factory=list)
    best_time_to_visit: str
    average_trip_duration: str


class QuickFacts(BaseModel):
    language: str
    currency: str
    timezone: str
    safety_rating: str
    budget_level: str
    average_daily_cost: str


class OverviewSection(BaseModel):
    introduction: str
    why_visit: list[str] = Field(default_factory=list)
    quick_facts: QuickFacts
    local_culture: str = ""
    provenance: Provenance = Field(..., description="소개 문단을 제공한 해석 단계")


class AttractionItem(BaseModel):
    name: str
    description: str = ""
    rating: float | None = None
    price_level: str | None = None
    duration: str = ""
    best_time: str = ""
    must_see: bool = False


class ThingsToDoSection(BaseModel):
    must_see: list[AttractionItem] = Field(default_factory=list)
    hidden_gems: list[AttractionItem] = Field(default_factory=list)


class RestaurantItem(BaseModel):
    name: str
    cuisine: list[str] = Field(default_factory=list)
    price_level: str | None = None
    rating: float | None = None
    highlights: str = ""


class DiningSection(BaseModel):
    restaurants: list[RestaurantItem] = Field(default_factory=list)
    local_cuisine: list[str] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)


class VenueItem(BaseModel):
    name: str
    description: str = ""
    rating: float | None = None
    price_level: str | None = None
    address: str | None = None


class VenueSection(BaseModel):
    venues: list[VenueItem] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)


class CultureSection(BaseModel):
    considerations: str = ""
    languages: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)


class PracticalInfoSection(BaseModel):
    getting_around: str
    safety: str
    money: str
    visa: str
    language: str


class GuideResponse(BaseModel):
    destination: GuideDestination
    overview: OverviewSection | None = None
    things_to_do: ThingsToDoSection | None = None
    dining: DiningSection | None = None
    nightlife: VenueSection | None = None
    shopping: VenueSection | None = None
    culture: CultureSection | None = None
    practical_info: PracticalInfoSection | None = None
    insider_tips: list[str] = Field(default_factory=list)
    seasonal_highlights: list[str] = Field(default_factory=list)


class GeneratedIntroduction(BaseModel):
    """생성형 보강이 반환해야 하는 소개 문단 스키마."""

    introduction: str = Field(..., min_length=100, description="2~3 문단 분량의 여행지 소개")
    highlights: list[str] = Field(default_factory=list, description="소개에서 강조한 핵심 포인트")
