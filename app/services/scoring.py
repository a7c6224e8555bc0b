"""여행지 매칭 점수 계산 엔진.

점수는 가산식이며 항목 간 순서와 무관합니다.

    기본 50
    + 프로필 관심사에 포함된 카테고리 태그마다 10
    + 예산 등급 일치 15
    + 버킷리스트 포함 25
    + 요청 컨텍스트 관심사와 일치하는 카테고리 태그마다 15
    + 여행 월이 방문 적기 20
    + min(2 × 과거 추천 노출 수, 10)
    + 관광 인프라 평점 × 2
    → [0, 100]으로 제한
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from app.schemas.records import DestinationRecord, PreferenceRecord

BASE_SCORE = 50
PROFILE_INTEREST_POINTS = 10
BUDGET_MATCH_POINTS = 15
BUCKET_LIST_POINTS = 25
CONTEXT_INTEREST_POINTS = 15
SEASONAL_MATCH_POINTS = 20
POPULARITY_POINTS_PER_APPEARANCE = 2
POPULARITY_POINTS_CAP = 10
INFRASTRUCTURE_MULTIPLIER = 2
MAX_SCORE = 100
MIN_SCORE = 0

MAX_MATCH_REASONS = 3
HIGH_SAFETY_THRESHOLD = 4.0
EXCELLENT_INFRASTRUCTURE_THRESHOLD = 4.5
DEFAULT_MATCH_REASONS = ("Popular destination", "Great for first-time visitors")


@dataclass(frozen=True, slots=True)
class ScoringContext:
    """요청 단위 선호 신호. 관심사는 대문자로 정규화되어 저장됩니다."""

    interests: tuple[str, ...] = ()
    travel_month: str | None = None

    @classmethod
    def build(cls, interests: Iterable[str] = (), travel_month: str | None = None) -> "ScoringContext":
        normalized = tuple(dict.fromkeys(item.strip().upper() for item in interests if item and item.strip()))
        return cls(interests=normalized, travel_month=travel_month)


@dataclass(frozen=True, slots=True)
class ScoredCandidate:
    destination: DestinationRecord
    score: int
    reasons: list[str] = field(default_factory=list)


def _profile_interest_tags(candidate: DestinationRecord, profile: PreferenceRecord) -> list[str]:
    interests = [interest.upper() for interest in profile.interests if interest]
    return [tag for tag in candidate.destination_type if any(tag.upper() in interest for interest in interests)]


def _context_interest_tags(candidate: DestinationRecord, context: ScoringContext) -> list[str]:
    return [tag for tag in candidate.destination_type if tag.upper() in context.interests]


def _is_seasonal_match(candidate: DestinationRecord, context: ScoringContext) -> bool:
    return bool(context.travel_month) and context.travel_month in candidate.best_time_to_visit.months


def _is_bucket_list(candidate: DestinationRecord, profile: PreferenceRecord) -> bool:
    return candidate.city.lower() in {name.lower() for name in profile.bucket_list_destinations}


def popularity_points(prior_recommendations: int) -> int:
    return min(POPULARITY_POINTS_PER_APPEARANCE * max(0, prior_recommendations), POPULARITY_POINTS_CAP)


def score_destination(
    candidate: DestinationRecord,
    profile: PreferenceRecord | None,
    context: ScoringContext,
    prior_recommendations: int = 0,
) -> int:
    """후보 여행지의 매칭 점수(0~100 정수)를 계산합니다."""
    score = float(BASE_SCORE)

    if profile is not None:
        score += PROFILE_INTEREST_POINTS * len(_profile_interest_tags(candidate, profile))
        if profile.budget_preference and candidate.budget_level == profile.budget_preference:
            score += BUDGET_MATCH_POINTS
        if _is_bucket_list(candidate, profile):
            score += BUCKET_LIST_POINTS

    score += CONTEXT_INTEREST_POINTS * len(_context_interest_tags(candidate, context))

    if _is_seasonal_match(candidate, context):
        score += SEASONAL_MATCH_POINTS

    score += popularity_points(prior_recommendations)
    score += candidate.tourist_infrastructure_rating * INFRASTRUCTURE_MULTIPLIER

    return int(round(min(MAX_SCORE, max(MIN_SCORE, score))))


def match_reasons(
    candidate: DestinationRecord,
    profile: PreferenceRecord | None,
    context: ScoringContext,
) -> list[str]:
    """발동한 점수 항목을 사람이 읽을 수 있는 이유로 최대 3개까지 반환합니다."""
    reasons: list[str] = []

    if _is_seasonal_match(candidate, context):
        reasons.append(f"Perfect weather in {context.travel_month}")

    matched_tags = _context_interest_tags(candidate, context)
    if profile is not None:
        matched_tags += _profile_interest_tags(candidate, profile)
    if matched_tags:
        reasons.append(f"Matches your interest in {matched_tags[0].lower()}")

    if candidate.safety_rating >= HIGH_SAFETY_THRESHOLD:
        reasons.append("High safety rating")
    if candidate.tourist_infrastructure_rating >= EXCELLENT_INFRASTRUCTURE_THRESHOLD:
        reasons.append("Excellent tourist infrastructure")

    if not reasons:
        reasons.extend(DEFAULT_MATCH_REASONS)
    return reasons[:MAX_MATCH_REASONS]


def _ranking_key(candidate: ScoredCandidate) -> tuple:
    destination = candidate.destination
    return (
        -candidate.score,
        -destination.tourist_infrastructure_rating,
        destination.city.lower(),
        str(destination.id),
    )


def rank_candidates(candidates: Iterable[ScoredCandidate]) -> list[ScoredCandidate]:
    """점수 내림차순, 인프라 평점 내림차순, 도시명, id 순으로 정렬합니다."""
    return sorted(candidates, key=_ranking_key)
