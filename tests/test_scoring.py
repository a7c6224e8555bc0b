"""여행지 매칭 점수 계산 테스트."""

from uuid import uuid4

from app.schemas.records import DestinationRecord, PreferenceRecord
from app.services.scoring import (
    DEFAULT_MATCH_REASONS,
    ScoredCandidate,
    ScoringContext,
    match_reasons,
    popularity_points,
    rank_candidates,
    score_destination,
)


def _destination(city: str = "Lisbon", **overrides) -> DestinationRecord:
    data = {
        "id": uuid4(),
        "city": city,
        "country": "Portugal",
        "destination_type": ["CULTURAL", "BEACH"],
        "best_time_to_visit": {"months": ["May", "September"], "weather": "Sunny"},
        "safety_rating": 3.0,
        "tourist_infrastructure_rating": 0.0,
        "budget_level": "MODERATE",
        "average_daily_cost_usd": 90.0,
    }
    data.update(overrides)
    return DestinationRecord.model_validate(data)


def _profile(**overrides) -> PreferenceRecord:
    data = {"passenger_id": "p-1", "interests": [], "bucket_list_destinations": []}
    data.update(overrides)
    return PreferenceRecord.model_validate(data)


class TestScoreDestination:
    """score_destination 가산 규칙 테스트."""

    def test_base_score_without_signals(self):
        """신호가 없으면 기본 점수 50."""
        assert score_destination(_destination(), None, ScoringContext.build()) == 50

    def test_infrastructure_rating_is_doubled_and_rounded(self):
        """인프라 평점 4.8 → +9.6, 반올림 60."""
        candidate = _destination(tourist_infrastructure_rating=4.8)

        assert score_destination(candidate, None, ScoringContext.build()) == 60

    def test_context_interests_add_per_matching_tag(self):
        """요청 관심사와 일치하는 태그마다 15점 (대소문자 무관)."""
        context = ScoringContext.build(["cultural", "beach", "luxury"])

        assert score_destination(_destination(), None, context) == 80

    def test_seasonal_match_adds_twenty(self):
        context = ScoringContext.build(travel_month="September")

        assert score_destination(_destination(), None, context) == 70

    def test_profile_signals(self):
        """프로필 관심사(부분 일치), 예산 일치, 버킷리스트."""
        profile = _profile(
            interests=["CULTURAL TOURS"],
            budget_preference="MODERATE",
            bucket_list_destinations=["lisbon"],
        )

        assert score_destination(_destination(), profile, ScoringContext.build()) == 50 + 10 + 15 + 25

    def test_popularity_bonus_is_capped(self):
        assert popularity_points(0) == 0
        assert popularity_points(3) == 6
        assert popularity_points(12) == 10
        assert score_destination(_destination(), None, ScoringContext.build(), prior_recommendations=50) == 60

    def test_score_is_clamped_to_hundred(self):
        profile = _profile(
            interests=["CULTURAL", "BEACH"],
            budget_preference="MODERATE",
            bucket_list_destinations=["Lisbon"],
        )
        context = ScoringContext.build(["CULTURAL", "BEACH"], "May")
        candidate = _destination(tourist_infrastructure_rating=5.0)

        assert score_destination(candidate, profile, context, prior_recommendations=5) == 100

    def test_bucket_list_adds_exactly_twenty_five(self):
        candidate = _destination(tourist_infrastructure_rating=3.3)
        context = ScoringContext.build()
        interests = ["CULTURAL TOURS"]

        without = score_destination(candidate, _profile(interests=interests), context)
        with_bucket = score_destination(
            candidate,
            _profile(interests=interests, bucket_list_destinations=["LISBON"]),
            context,
        )

        assert with_bucket - without == 25

    def test_score_never_drops_as_more_interest_tags_match(self):
        """일치하는 관심사 태그 수가 늘어도 점수는 감소하지 않는다 (상한 100 포함)."""
        candidate = _destination(
            destination_type=["CULTURAL", "BEACH", "FOOD", "NIGHTLIFE"],
            tourist_infrastructure_rating=4.0,
        )
        tags = ["CULTURAL", "BEACH", "FOOD", "NIGHTLIFE"]

        scores = [
            score_destination(candidate, None, ScoringContext.build(tags[:count], "May"), prior_recommendations=5)
            for count in range(len(tags) + 1)
        ]

        assert scores == sorted(scores)
        assert all(0 <= score <= 100 for score in scores)
        assert scores[-1] == 100

    def test_score_does_not_depend_on_interest_order(self):
        candidate = _destination()

        first = score_destination(candidate, None, ScoringContext.build(["BEACH", "CULTURAL"]))
        second = score_destination(candidate, None, ScoringContext.build(["CULTURAL", "BEACH"]))

        assert first == second


class TestMatchReasons:
    """match_reasons 테스트."""

    def test_default_reasons_when_nothing_fires(self):
        assert match_reasons(_destination(), None, ScoringContext.build()) == list(DEFAULT_MATCH_REASONS)

    def test_reasons_are_limited_to_three(self):
        candidate = _destination(safety_rating=4.5, tourist_infrastructure_rating=4.9)
        context = ScoringContext.build(["CULTURAL", "BEACH"], "May")

        reasons = match_reasons(candidate, None, context)

        assert reasons == ["Perfect weather in May", "Matches your interest in cultural", "High safety rating"]

    def test_only_first_interest_becomes_a_reason(self):
        """관심사가 여러 개 일치해도 이유는 하나이며 안전/인프라 이유를 밀어내지 않는다."""
        candidate = _destination(
            destination_type=["CULTURAL", "BEACH", "FOOD"],
            safety_rating=4.5,
            tourist_infrastructure_rating=4.9,
        )
        profile = _profile(interests=["FOOD LOVER"])
        context = ScoringContext.build(["CULTURAL", "BEACH"])

        reasons = match_reasons(candidate, profile, context)

        assert reasons == [
            "Matches your interest in cultural",
            "High safety rating",
            "Excellent tourist infrastructure",
        ]

    def test_safety_and_infrastructure_reasons(self):
        candidate = _destination(safety_rating=4.2, tourist_infrastructure_rating=4.8)

        reasons = match_reasons(candidate, None, ScoringContext.build())

        assert reasons == ["High safety rating", "Excellent tourist infrastructure"]


class TestRankCandidates:
    """rank_candidates 정렬 테스트."""

    def test_ties_break_on_infrastructure_then_city(self):
        alpha = ScoredCandidate(_destination("Alpha", tourist_infrastructure_rating=4.0), 70)
        beta = ScoredCandidate(_destination("beta", tourist_infrastructure_rating=4.0), 70)
        gamma = ScoredCandidate(_destination("Gamma", tourist_infrastructure_rating=4.5), 70)
        top = ScoredCandidate(_destination("Zeta"), 90)

        ranked = rank_candidates([beta, alpha, gamma, top])

        assert [candidate.destination.city for candidate in ranked] == ["Zeta", "Gamma", "Alpha", "beta"]
