"""콘텐츠 성과 분석 도구 스키마."""

from datetime import date, datetime, time, timezone

from pydantic import BaseModel, Field, field_validator, model_validator


class AnalysisPeriod(BaseModel):
    """분석 기간. 시간대가 없는 값은 UTC로 간주합니다.

    날짜만 주어진 `end_date`는 그날 전체를 포함하도록 23:59:59.999999로 확장됩니다.
    """

    start_date: datetime
    end_date: datetime

    @field_validator("end_date", mode="before")
    @classmethod
    def _extend_date_only_end(cls, value: object) -> object:
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.max)
        if isinstance(value, str) and len(value.strip()) == 10 and value.strip()[4] == "-":
            return datetime.combine(date.fromisoformat(value.strip()), time.max)
        return value

    @field_validator("start_date", "end_date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)

    @model_validator(mode="after")
    def _check_order(self) -> "AnalysisPeriod":
        if self.start_date > self.end_date:
            raise ValueError("analysis_period.start_date must not be after end_date")
        return self


class ContentPerformanceRequest(BaseModel):
    analysis_period: AnalysisPeriod | None = None
    content_type: str | None = None


class PerformanceSummary(BaseModel):
    total_content_views: int
    total_interactions: int
    total_conversions: int
    average_time_on_page: int
    conversion_rate: float


class DestinationPerformance(BaseModel):
    destination: str
    views: int
    bookings: int
    conversion_rate: float
    revenue_generated: float


class ContentInsight(BaseModel):
    insight: str
    recommendation: str


class ContentPerformanceResponse(BaseModel):
    analysis_period: AnalysisPeriod
    summary: PerformanceSummary
    top_performing_destinations: list[DestinationPerformance] = Field(default_factory=list)
    content_insights: list[ContentInsight] = Field(default_factory=list)
