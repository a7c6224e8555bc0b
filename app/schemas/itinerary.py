"""맞춤 일정 생성 도구 스키마."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from app.schemas.records import DaySchedule, Provenance

PacePreference = Literal["RELAXED", "MODERATE", "PACKED"]


class TravelerProfile(BaseModel):
    traveler_type: str | None = Field(default=None, description="Type of traveler (e.g., FAMILY, COUPLE)")
    interests: list[str] = Field(default_factory=list, description="Traveler interests")
    pace_preference: PacePreference | None = Field(default=None, description="Preferred pace of activities")
    budget_level: str | None = Field(default=None, description="Budget preference")
    must_see_attractions: list[str] = Field(default_factory=list, description="꼭 방문해야 하는 명소")


class TravelDates(BaseModel):
    arrival_date: date | None = Field(default=None, description="Arrival date (YYYY-MM-DD)")
    departure_date: date | None = Field(default=None, description="Departure date (YYYY-MM-DD)")


class ItineraryRequest(BaseModel):
    destination: str = Field(..., min_length=1, description="Destination city name")
    duration_days: int = Field(..., description="Number of days for the trip (1-30)")
    traveler_profile: TravelerProfile | None = Field(default=None)
    travel_dates: TravelDates | None = Field(default=None)

    @field_validator("duration_days")
    @classmethod
    def _validate_duration(cls, value: int) -> int:
        if value < 1 or value > 30:
            raise ValueError("Duration must be between 1 and 30 days")
        return value


class ItinerarySummary(BaseModel):
    destination: str
    total_days: int
    travel_style: str
    overview: str
    arrival_date: date | None = None
    departure_date: date | None = None


class BudgetBreakdown(BaseModel):
    accommodation: float | None = None
    meals: float
    activities: float
    transportation: float
    total_per_day: float


class AlternativeOption(BaseModel):
    """특정 일자 활동을 대신할 수 있는 선택지."""

    day: int = Field(..., ge=1, description="대상 일자")
    original_activity: str = Field(..., description="대체할 원래 활동")
    alternative: str = Field(..., description="대체 활동")
    reason: str = Field(..., description="대체를 고려할 상황 (우천, 휴무 등)")


class ItineraryResponse(BaseModel):
    itinerary: ItinerarySummary
    daily_schedule: list[DaySchedule]
    alternative_options: list[AlternativeOption] = Field(default_factory=list)
    packing_list: list[str] = Field(default_factory=list)
    budget_breakdown: BudgetBreakdown
    provenance: Provenance


class GeneratedItinerary(BaseModel):
    """생성형 보강이 반환해야 하는 일정 스키마."""

    overview: str = Field(..., description="일정 전체 요약")
    travel_style: str = Field(default="BALANCED", description="RELAXED, BALANCED, PACKED 중 하나")
    daily_schedule: list[DaySchedule] = Field(..., description="일자별 일정 (1일차부터 순서대로)")
    alternative_options: list[AlternativeOption] = Field(default_factory=list, description="대체 활동")
    packing_list: list[str] = Field(default_factory=list, description="준비물")
