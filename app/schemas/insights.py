"""계절/현지 인사이트 도구 스키마."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from app.core.calendar import normalize_month

InsightCategory = Literal["CUSTOMS", "ETIQUETTE", "MONEY", "SAFETY", "LANGUAGE", "TRANSPORTATION"]


class SeasonalInsightsRequest(BaseModel):
    destination: str = Field(..., min_length=1)
    month: str | None = Field(default=None, description='Month name (e.g., "January")')
    include_events: bool = True
    include_weather: bool = True

    @field_validator("month")
    @classmethod
    def _normalize_month(cls, value: str | None) -> str | None:
        if value is None:
            return None
        month = normalize_month(value)
        if month is None:
            raise ValueError(f"Unsupported month: {value}")
        return month


class SeasonalOverview(BaseModel):
    destination: str
    month: str
    season: str
    is_best_time: bool
    overall_rating: str
    why_visit_now: list[str]


class WeatherInfo(BaseModel):
    average_temp_c: float
    precipitation_mm: int
    humidity_percentage: int
    description: str


class EventInfo(BaseModel):
    event_name: str
    event_type: str
    dates: str
    description: str
    crowd_level: str | None = None
    why_attend: str


class CrowdLevels(BaseModel):
    tourist_volume: str
    hotel_availability: str
    price_trends: str


class SeasonalInsightsResponse(BaseModel):
    seasonal_overview: SeasonalOverview
    weather: WeatherInfo | None = None
    events: list[EventInfo] = Field(default_factory=list)
    crowd_levels: CrowdLevels
    what_to_pack: list[str]
    insider_tips: list[str]


class LocalInsightsRequest(BaseModel):
    destination: str = Field(..., min_length=1)
    insight_categories: list[InsightCategory] | None = None


class CulturalInsights(BaseModel):
    greetings: str | None = None
    tipping_customs: str | None = None
    dress_code: str | None = None
    business_etiquette: str | None = None
    dos_and_donts: list[str] | None = None


class PracticalTips(BaseModel):
    best_way_to_get_around: str | None = None
    money_saving_tips: list[str] | None = None
    safety_considerations: list[str] | None = None
    language_basics: dict[str, str] | None = None


class LocalInsightsResponse(BaseModel):
    destination: str
    cultural_insights: CulturalInsights
    practical_tips: PracticalTips
    insider_secrets: list[str]
    common_tourist_mistakes: list[str]
