"""여행지 추천 도구 스키마."""

from pydantic import BaseModel, Field, field_validator, model_validator

from app.core.calendar import normalize_month


class BudgetRange(BaseModel):
    min: float | None = Field(default=None, ge=0, description="최소 일일 경비(USD)")
    max: float | None = Field(default=None, ge=0, description="최대 일일 경비(USD)")

    @model_validator(mode="after")
    def _check_order(self) -> "BudgetRange":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("budget_range.min must not exceed budget_range.max")
        return self


class RecommendContext(BaseModel):
    """요청 단위(비영속) 선호 신호."""

    travel_month: str | None = Field(default=None, description="Preferred travel month")
    budget_range: BudgetRange | None = Field(default=None)
    interests: list[str] = Field(default_factory=list)
    previous_destinations: list[str] = Field(default_factory=list)

    @field_validator("travel_month")
    @classmethod
    def _normalize_travel_month(cls, value: str | None) -> str | None:
        if value is None:
            return None
        month = normalize_month(value)
        if month is None:
            raise ValueError(f"Unsupported month: {value}")
        return month


class RecommendConstraints(BaseModel):
    max_flight_hours: float | None = Field(default=None, ge=0)
    climate_preference: str | None = None
    language_preference: list[str] = Field(default_factory=list)


class RecommendRequest(BaseModel):
    passenger_id: str | None = Field(default=None, description="Passenger ID for personalization")
    context: RecommendContext = Field(default_factory=RecommendContext)
    constraints: RecommendConstraints | None = Field(default=None)
    recommendation_count: int = Field(default=5, ge=1, le=10)


class RecommendedDestination(BaseModel):
    """추천 여행지 단일 항목."""

    rank: int
    destination: str
    country: str
    match_score: int = Field(..., ge=0, le=100)
    match_reasons: list[str] = Field(..., max_length=3)
    destination_highlights: list[str] = Field(default_factory=list)
    estimated_budget: str
    best_time_to_visit: str
    why_now: str
    hero_image: str | None = None
    call_to_action: str


class InspirationTheme(BaseModel):
    theme: str
    destinations: list[str]


class RecommendResponse(BaseModel):
    recommendations: list[RecommendedDestination]
    personalization_applied: bool
    inspiration_themes: list[InspirationTheme] = Field(default_factory=list)
