"""저장소 경계에서 검증되는 도메인 레코드.

ORM 행의 JSON 컬럼(방문 적기, 월별 기온, 일자별 일정)은 그대로 전달하지 않고
이 모듈의 명시적 타입으로 검증한 뒤 서비스 계층에 넘깁니다.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

BudgetLevel = Literal["BUDGET", "MODERATE", "UPSCALE", "LUXURY"]
Provenance = Literal["TEMPLATE", "GENERATED", "FALLBACK"]


def _none_to_list(value: object) -> object:
    return [] if value is None else value


class BestTimeToVisit(BaseModel):
    """방문 적기: 월 집합과 그 이유."""

    months: list[str] = Field(default_factory=list, description="방문 적기 월 이름 목록")
    weather: str | None = Field(default=None, description="해당 시기의 날씨 설명")
    events: list[str] = Field(default_factory=list, description="해당 시기의 대표 행사")

    @field_validator("months", "events", mode="before")
    @classmethod
    def _normalize_lists(cls, value: object) -> object:
        return _none_to_list(value)


class SlotPlan(BaseModel):
    """하루 일정의 시간대(오전/오후/저녁) 슬롯."""

    activity: str = Field(..., description="활동")
    location: str = Field(default="", description="장소")
    duration: str = Field(default="", description="예상 소요 시간")
    why_this: str = Field(default="", description="추천 이유")
    tips: list[str] = Field(default_factory=list, description="팁")

    @field_validator("tips", mode="before")
    @classmethod
    def _coerce_tips(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        return value


class Meals(BaseModel):
    breakfast: str = Field(default="", description="아침 식사")
    lunch: str = Field(default="", description="점심 식사")
    dinner: str = Field(default="", description="저녁 식사")


class DaySchedule(BaseModel):
    """일자별 일정 레코드."""

    day: int = Field(..., ge=1, description="1부터 시작하는 일차")
    theme: str = Field(default="", description="일자 테마")
    morning: SlotPlan
    afternoon: SlotPlan
    evening: SlotPlan
    meals: Meals = Field(default_factory=Meals)
    estimated_cost: float = Field(default=0.0, ge=0, description="1인 기준 예상 비용(USD)")
    walking_distance_km: float = Field(default=0.0, ge=0, description="예상 도보 거리(km)")


class DestinationRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    city: str
    country: str
    airport_code: str | None = None
    region: str | None = None
    continent: str | None = None
    destination_type: list[str] = Field(default_factory=list)
    best_time_to_visit: BestTimeToVisit = Field(default_factory=BestTimeToVisit)
    average_temp_celsius: dict[str, float] = Field(default_factory=dict)
    languages_spoken: list[str] = Field(default_factory=list)
    currency: str | None = None
    timezone: str | None = None
    visa_requirements: str | None = None
    safety_rating: float = Field(default=0.0, ge=0, le=5)
    tourist_infrastructure_rating: float = Field(default=0.0, ge=0, le=5)
    budget_level: str = "MODERATE"
    average_daily_cost_usd: float = Field(default=0.0, ge=0)
    popular_activities: list[str] = Field(default_factory=list)
    famous_attractions: list[str] = Field(default_factory=list)
    local_cuisine_highlights: list[str] = Field(default_factory=list)
    cultural_considerations: str | None = None
    hero_image_url: str | None = None
    gallery_images: list[str] = Field(default_factory=list)
    short_description: str | None = None
    long_description: str | None = None

    @field_validator(
        "destination_type",
        "languages_spoken",
        "popular_activities",
        "famous_attractions",
        "local_cuisine_highlights",
        "gallery_images",
        mode="before",
    )
    @classmethod
    def _normalize_lists(cls, value: object) -> object:
        return _none_to_list(value)

    @field_validator("best_time_to_visit", mode="before")
    @classmethod
    def _default_best_time(cls, value: object) -> object:
        return {} if value is None else value

    @field_validator("average_temp_celsius", mode="before")
    @classmethod
    def _default_temperatures(cls, value: object) -> object:
        if not value:
            return {}
        return {str(key).lower()[:3]: temp for key, temp in dict(value).items() if temp is not None}

    def temperature_for(self, month_key: str, default: float = 20.0) -> float:
        """월 키(`jan`..`dec`)에 해당하는 평균 기온. 기록이 없으면 기본값."""
        return float(self.average_temp_celsius.get(month_key, default))

    def best_time_label(self) -> str:
        months = self.best_time_to_visit.months
        return ", ".join(months) if months else "Year-round"


class PointOfInterestRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    poi_type: str
    category: list[str] = Field(default_factory=list)
    description: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    rating: float | None = None
    review_count: int = 0
    price_level: str | None = None
    visit_duration_minutes: int | None = None
    best_time_to_visit: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_must_see: bool = False
    address: str | None = None
    images: list[str] = Field(default_factory=list)

    @field_validator("category", "tags", "images", mode="before")
    @classmethod
    def _normalize_lists(cls, value: object) -> object:
        return _none_to_list(value)


class GuideRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    guide_type: str
    title: str
    content: str
    highlights: list[str] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)
    insider_recommendations: list[str] = Field(default_factory=list)
    author: str = "Editorial Team"
    view_count: int = 0

    @field_validator("highlights", "tips", "insider_recommendations", mode="before")
    @classmethod
    def _normalize_lists(cls, value: object) -> object:
        return _none_to_list(value)


class ItineraryTemplateRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    template_name: str
    duration_days: int = Field(..., ge=1, le=30)
    trip_style: str = "BALANCED"
    target_audience: str = "GENERAL"
    daily_schedule: list[DaySchedule] = Field(default_factory=list)
    estimated_cost_usd: float | None = None
    packing_list: list[str] = Field(default_factory=list)
    budget_breakdown: dict[str, float] = Field(default_factory=dict)
    usage_count: int = 0
    average_rating: float | None = None
    is_featured: bool = False

    @field_validator("daily_schedule", "packing_list", mode="before")
    @classmethod
    def _normalize_lists(cls, value: object) -> object:
        return _none_to_list(value)

    @field_validator("budget_breakdown", mode="before")
    @classmethod
    def _default_breakdown(cls, value: object) -> object:
        return {} if value is None else value


class SeasonalEventRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    event_name: str
    event_type: str
    start_date: date
    end_date: date
    description: str | None = None
    expected_crowd_level: str | None = None
    relevance_score: float = Field(default=0.5, ge=0, le=1)


class PreferenceRecord(BaseModel):
    """여행자 선호 프로필 (점수 계산 입력)."""

    model_config = ConfigDict(from_attributes=True)

    passenger_id: str
    travel_style: str | None = None
    interests: list[str] = Field(default_factory=list)
    budget_preference: str | None = None
    travel_companions: str | None = None
    pace_preference: str | None = None
    bucket_list_destinations: list[str] = Field(default_factory=list)
    typical_trip_duration: int | None = None

    @field_validator("interests", "bucket_list_destinations", mode="before")
    @classmethod
    def _normalize_lists(cls, value: object) -> object:
        return _none_to_list(value)


class InspirationRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    content_type: str
    theme: str
    title: str
    subtitle: str | None = None
    content: str
    call_to_action: str | None = None
    images: list[str] = Field(default_factory=list)
    seo_metadata: dict = Field(default_factory=dict)
    view_count: int = 0

    @field_validator("images", mode="before")
    @classmethod
    def _normalize_lists(cls, value: object) -> object:
        return _none_to_list(value)

    @field_validator("seo_metadata", mode="before")
    @classmethod
    def _default_seo(cls, value: object) -> object:
        return {} if value is None else value


class ContentPerformanceRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    content_type: str
    view_count: int = 0
    click_count: int = 0
    conversion_count: int = 0
    conversion_rate: float = 0.0
    created_at: datetime | None = None
