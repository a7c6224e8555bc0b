"""여행지 추천 도구 (recommend-destinations)."""

from __future__ import annotations

from app.core.logger import get_logger
from app.schemas.recommend import (
    InspirationTheme,
    RecommendedDestination,
    RecommendRequest,
    RecommendResponse,
)
from app.schemas.records import DestinationRecord, PreferenceRecord
from app.services.context import ToolContext
from app.services.scoring import (
    ScoredCandidate,
    ScoringContext,
    match_reasons,
    rank_candidates,
    score_destination,
)

logger = get_logger(__name__)

DEFAULT_DAILY_COST = 100.0
HIGHLIGHT_COUNT = 4
MAX_THEMES = 3
MAX_THEME_DESTINATIONS = 5
PACKAGE_NIGHTS = 3


def _filter_candidates(
    candidates: list[DestinationRecord],
    interests: tuple[str, ...],
    previous_destinations: list[str],
) -> list[DestinationRecord]:
    """관심사가 하나라도 겹치고 이전 방문지가 아닌 후보만 남깁니다."""
    excluded = {name.strip().lower() for name in previous_destinations if name.strip()}
    interest_set = set(interests)

    filtered = []
    for candidate in candidates:
        if candidate.city.lower() in excluded:
            continue
        if interest_set and not interest_set.intersection(tag.upper() for tag in candidate.destination_type):
            continue
        filtered.append(candidate)
    return filtered


def _to_recommendation(rank: int, scored: ScoredCandidate) -> RecommendedDestination:
    destination = scored.destination
    daily_cost = destination.average_daily_cost_usd or DEFAULT_DAILY_COST
    return RecommendedDestination(
        rank=rank,
        destination=destination.city,
        country=destination.country,
        match_score=scored.score,
        match_reasons=scored.reasons,
        destination_highlights=destination.famous_attractions[:HIGHLIGHT_COUNT],
        estimated_budget=f"${daily_cost:g}/day",
        best_time_to_visit=destination.best_time_label(),
        why_now=destination.best_time_to_visit.weather or "Great time to visit",
        hero_image=destination.hero_image_url,
        call_to_action=f"Explore {destination.city} packages from ${round(daily_cost * PACKAGE_NIGHTS)}",
    )


def _inspiration_themes(candidates: list[ScoredCandidate]) -> list[InspirationTheme]:
    themes: dict[str, list[str]] = {}
    for scored in candidates:
        for tag in scored.destination.destination_type:
            cities = themes.setdefault(tag, [])
            if len(cities) < MAX_THEME_DESTINATIONS:
                cities.append(scored.destination.city)
    return [
        InspirationTheme(theme=tag.capitalize(), destinations=cities)
        for tag, cities in list(themes.items())[:MAX_THEMES]
    ]


def recommend_destinations(context: ToolContext, request: RecommendRequest) -> RecommendResponse:
    """프로필과 요청 컨텍스트로 후보 여행지를 점수화해 상위 N개를 반환합니다."""
    repository = context.repository
    request_context = request.context
    scoring_context = ScoringContext.build(request_context.interests, request_context.travel_month)

    profile: PreferenceRecord | None = None
    if request.passenger_id:
        profile = repository.get_preference(request.passenger_id)

    budget = request_context.budget_range
    candidates = repository.list_active_destinations(
        min_daily_cost=budget.min if budget else None,
        max_daily_cost=budget.max if budget else None,
    )
    candidates = _filter_candidates(candidates, scoring_context.interests, request_context.previous_destinations)

    appearances = repository.count_recommendation_appearances() if candidates else {}
    scored = rank_candidates(
        ScoredCandidate(
            destination=candidate,
            score=score_destination(candidate, profile, scoring_context, appearances.get(candidate.city, 0)),
            reasons=match_reasons(candidate, profile, scoring_context),
        )
        for candidate in candidates
    )

    min_score = context.settings.MIN_RECOMMENDATION_SCORE
    shown = [candidate for candidate in scored if candidate.score >= min_score][: request.recommendation_count]
    recommendations = [_to_recommendation(rank, candidate) for rank, candidate in enumerate(shown, start=1)]

    if request.passenger_id:
        session_id = f"session_{int(context.now().timestamp() * 1000)}"
        context.writer.submit(
            "recommendation.log",
            lambda: repository.log_recommendations(
                passenger_id=request.passenger_id,
                session_id=session_id,
                context=request_context.model_dump(mode="json", exclude_none=True),
                shown=[(item.destination, item.match_score) for item in recommendations],
            ),
        )

    logger.info(
        "추천 완료: candidates=%d shown=%d profile=%s",
        len(candidates),
        len(recommendations),
        profile is not None,
    )
    return RecommendResponse(
        recommendations=recommendations,
        personalization_applied=profile is not None or bool(scoring_context.interests),
        inspiration_themes=_inspiration_themes(scored),
    )
