"""여행지 비교 도구 스키마."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

ComparisonCriterion = Literal["COST", "WEATHER", "ACTIVITIES", "CULTURE", "FOOD", "FAMILY_FRIENDLY"]

DEFAULT_COMPARISON_CRITERIA: tuple[ComparisonCriterion, ...] = ("COST", "WEATHER", "ACTIVITIES", "CULTURE")


class CompareRequest(BaseModel):
    destinations: list[str] = Field(..., description="2-4 destination names")
    comparison_criteria: list[ComparisonCriterion] | None = None

    @field_validator("destinations")
    @classmethod
    def _validate_destinations(cls, value: list[str]) -> list[str]:
        names = [name.strip() for name in value]
        if len(names) < 2 or len(names) > 4:
            raise ValueError("Please provide 2-4 destinations to compare")
        if any(not name for name in names):
            raise ValueError("Destination names must not be empty")
        if len({name.lower() for name in names}) != len(names):
            raise ValueError("Destinations must be distinct")
        return names


class CriterionRow(BaseModel):
    criterion: str
    values: dict[str, str]
    winner: str | None = None


class ComparisonMatrix(BaseModel):
    destinations: list[str]
    criteria: list[CriterionRow]


class ComparisonRecommendation(BaseModel):
    best_for_budget: str
    best_for_weather: str
    best_for_culture: str
    overall_recommendation: str


class CompareResponse(BaseModel):
    comparison_matrix: ComparisonMatrix
    recommendation: ComparisonRecommendation
