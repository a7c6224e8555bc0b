"""도구 핸들러 테스트 (시드 데이터 기반)."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import InvalidInputError, NotFoundError
from app.schemas.analytics import AnalysisPeriod
from app.schemas.compare import CompareRequest
from app.seed import SAMPLE_PASSENGER_ID
from app.services.compare_service import compare_destinations
from app.services.tool_dispatch import DEFAULT_TOOLS, ToolDispatcher

WIDE_PERIOD = {"start_date": "2000-01-01T00:00:00Z", "end_date": "2100-01-01T00:00:00Z"}


@pytest.fixture
def dispatcher(tool_context) -> ToolDispatcher:
    return ToolDispatcher(tool_context)


class TestDispatcher:
    """ToolDispatcher 오류 envelope 테스트."""

    def test_catalog_lists_all_tools(self, dispatcher):
        catalog = dispatcher.catalog()

        assert [tool["name"] for tool in catalog] == [tool.name for tool in DEFAULT_TOOLS]
        assert len(catalog) == 10
        assert all(tool["input_schema"]["type"] == "object" for tool in catalog)

    def test_unknown_tool_returns_not_found_envelope(self, dispatcher):
        result = dispatcher.dispatch("book-flight", {})

        assert result.status_code == 404
        assert result.payload["error"] == "Unknown tool: book-flight"
        assert result.payload["tool"] == "book-flight"
        assert result.payload["timestamp"].startswith("2025-09-15T09:00:00")

    def test_unknown_destination_returns_not_found_envelope(self, dispatcher):
        result = dispatcher.dispatch("get-local-insights", {"destination": "Atlantis"})

        assert result.is_error
        assert result.status_code == 404
        assert result.payload["error"] == 'Destination "Atlantis" not found'

    def test_invalid_arguments_return_invalid_input_envelope(self, dispatcher):
        result = dispatcher.dispatch("get-things-to-do", {})

        assert result.status_code == 422
        assert "destination" in result.payload["error"]

    def test_storage_failure_returns_unavailable_envelope(self, tool_context):
        repository = MagicMock()
        repository.find_destination.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
        dispatcher = ToolDispatcher(replace(tool_context, repository=repository))

        result = dispatcher.dispatch("get-local-insights", {"destination": "Tokyo"})

        assert result.status_code == 503
        assert result.payload["error"] == "Storage temporarily unavailable"
        assert result.payload["tool"] == "get-local-insights"

    def test_success_payload_omits_empty_optionals(self, dispatcher):
        result = dispatcher.dispatch(
            "get-local-insights",
            {"destination": "Tokyo", "insight_categories": ["SAFETY"]},
        )

        assert result.status_code == 200
        assert "greetings" not in result.payload["cultural_insights"]
        assert result.payload["practical_tips"]["safety_considerations"]


class TestItineraryTool:
    """일정 도구 입력 검증 테스트."""

    @pytest.mark.parametrize("days", [0, 31])
    def test_out_of_range_duration_is_rejected_before_repository_access(self, tool_context, days):
        repository = MagicMock()
        dispatcher = ToolDispatcher(replace(tool_context, repository=repository))

        result = dispatcher.dispatch("generate-personalized-itinerary", {"destination": "Barcelona", "duration_days": days})

        assert result.status_code == 422
        assert "between 1 and 30" in result.payload["error"]
        repository.find_destination.assert_not_called()

    def test_unknown_destination(self, dispatcher):
        with pytest.raises(NotFoundError):
            dispatcher.invoke("generate-personalized-itinerary", {"destination": "Atlantis", "duration_days": 2})


class TestRecommendTool:
    """여행지 추천 도구 테스트."""

    def test_recommendations_are_bounded_and_ordered(self, dispatcher):
        payload = dispatcher.dispatch("recommend-destinations", {"recommendation_count": 5}).payload

        recommendations = payload["recommendations"]
        scores = [item["match_score"] for item in recommendations]
        assert 0 < len(recommendations) <= 5
        assert scores == sorted(scores, reverse=True)
        assert [item["rank"] for item in recommendations] == list(range(1, len(recommendations) + 1))
        assert all(len(item["match_reasons"]) <= 3 for item in recommendations)
        assert payload["personalization_applied"] is False

    def test_count_limits_results(self, dispatcher):
        payload = dispatcher.dispatch("recommend-destinations", {"recommendation_count": 2}).payload

        assert len(payload["recommendations"]) == 2

    def test_previous_destinations_are_excluded(self, dispatcher):
        payload = dispatcher.dispatch(
            "recommend-destinations",
            {"context": {"previous_destinations": ["barcelona", "TOKYO"]}},
        ).payload

        cities = {item["destination"] for item in payload["recommendations"]}
        assert "Barcelona" not in cities
        assert "Tokyo" not in cities

    def test_budget_range_filters_candidates(self, dispatcher):
        payload = dispatcher.dispatch(
            "recommend-destinations",
            {"context": {"budget_range": {"min": 90, "max": 130}}},
        ).payload

        assert {item["destination"] for item in payload["recommendations"]} == {"Barcelona", "Panama City"}

    def test_seasonal_interest_context_ranks_barcelona_first(self, dispatcher):
        payload = dispatcher.dispatch(
            "recommend-destinations",
            {"context": {"travel_month": "september", "interests": ["cultural"]}},
        ).payload

        top = payload["recommendations"][0]
        assert top["destination"] == "Barcelona"
        assert top["match_reasons"][0] == "Perfect weather in September"
        assert payload["personalization_applied"] is True

    def test_profile_personalization_logs_recommendations(self, tool_context, dispatcher):
        payload = dispatcher.dispatch("recommend-destinations", {"passenger_id": SAMPLE_PASSENGER_ID}).payload

        appearances = tool_context.repository.count_recommendation_appearances()
        assert payload["personalization_applied"] is True
        assert set(appearances) == {item["destination"] for item in payload["recommendations"]}
        assert all(count == 1 for count in appearances.values())

    def test_anonymous_request_is_not_logged(self, tool_context, dispatcher):
        dispatcher.dispatch("recommend-destinations", {})

        assert tool_context.repository.count_recommendation_appearances() == {}


class TestGuideTool:
    """여행지 가이드 도구 테스트."""

    def test_default_sections(self, tool_context, dispatcher):
        payload = dispatcher.dispatch("get-destination-guide", {"destination": "barcelona"}).payload

        assert payload["destination"]["name"] == "Barcelona"
        assert payload["overview"]["provenance"] == "TEMPLATE"
        assert payload["overview"]["introduction"].startswith("Barcelona combines stunning architecture")
        assert payload["things_to_do"]["must_see"][0]["name"] == "Sagrada Familia"
        assert "Use the metro - it's efficient and affordable" in payload["insider_tips"]

        destination = tool_context.repository.find_destination("Barcelona")
        guides = tool_context.repository.list_published_guides(destination.id, ["THINGS_TO_DO"])
        assert guides[0].view_count == 1

    def test_dining_section_only(self, dispatcher):
        payload = dispatcher.dispatch(
            "get-destination-guide",
            {"destination": "Barcelona", "guide_sections": ["DINING"]},
        ).payload

        assert "overview" not in payload
        assert [item["name"] for item in payload["dining"]["restaurants"]] == ["Tickets Bar"]
        assert payload["dining"]["local_cuisine"][0] == "Paella"


class TestActivityTools:
    """즐길 거리 / 맛집 도구 테스트."""

    def test_budget_filters_price_levels(self, dispatcher):
        cheap = dispatcher.dispatch("get-things-to-do", {"destination": "Barcelona", "budget_per_person": 10}).payload
        moderate = dispatcher.dispatch(
            "get-things-to-do",
            {"destination": "Barcelona", "budget_per_person": 25},
        ).payload

        assert cheap["total_activities"] == 0
        assert {item["name"] for item in moderate["activities"]} == {
            "Sagrada Familia",
            "Park Güell",
            "La Boqueria Market",
        }

    def test_activity_type_and_availability(self, dispatcher):
        payload = dispatcher.dispatch(
            "get-things-to-do",
            {"destination": "Barcelona", "activity_types": ["FOOD_DRINK"]},
        ).payload

        activity = payload["activities"][0]
        assert activity["name"] == "Tickets Bar"
        assert activity["estimated_price_usd"] == 150.0
        assert activity["booking"]["next_available"] == "2025-09-16"
        assert activity["booking"]["slots_remaining"] == 5 + 12000 % 20

    def test_must_do_collection(self, dispatcher):
        payload = dispatcher.dispatch("get-things-to-do", {"destination": "Barcelona"}).payload

        titles = [collection["title"] for collection in payload["curated_collections"]]
        assert titles[0] == "Top 10 Must-Do Experiences"
        assert "Food & Culinary Experiences" in titles

    def test_dining_cuisine_filter(self, dispatcher):
        payload = dispatcher.dispatch(
            "get-dining-recommendations",
            {"destination": "Barcelona", "cuisine_preferences": ["tapas"], "occasion": "ROMANTIC"},
        ).payload

        restaurant = payload["restaurants"][0]
        assert restaurant["name"] == "Tickets Bar"
        assert restaurant["best_for"] == "Romantic dinners"
        assert restaurant["insider_tip"]
        assert "dietary_friendly" not in restaurant
        assert len(payload["food_experiences"]) == 3

    def test_dining_price_level_filter(self, dispatcher):
        payload = dispatcher.dispatch(
            "get-dining-recommendations",
            {"destination": "Barcelona", "price_level": "BUDGET"},
        ).payload

        assert payload["restaurants"] == []
        assert payload["local_specialties"] == ["Paella", "Tapas", "Crema Catalana", "Pan con Tomate"]


class TestInspirationTool:
    """영감 콘텐츠 도구 테스트."""

    def test_stored_article_is_reused(self, dispatcher):
        payload = dispatcher.dispatch(
            "generate-travel-inspiration",
            {"content_type": "ARTICLE", "theme": "CULTURAL", "target_destination": "Barcelona"},
        ).payload

        assert payload["provenance"] == "TEMPLATE"
        assert payload["content"]["title"] == "48 Hours in Barcelona: The Perfect Weekend Getaway"
        assert payload["content"]["images"] == ["https://images.unsplash.com/photo-1583422409516-2895a77efded"]
        assert len(payload["seo_metadata"]["meta_description"]) <= 160

    def test_fallback_caps_word_count(self, dispatcher):
        payload = dispatcher.dispatch(
            "generate-travel-inspiration",
            {"content_type": "SOCIAL_POST", "theme": "BEACH", "target_destination": "Cartagena", "word_count": 5000},
        ).payload

        assert payload["provenance"] == "FALLBACK"
        assert payload["content"]["title"] == "Discover Cartagena: Beach Escapes"
        assert payload["content"]["estimated_read_time"] == 10

    def test_unknown_target_destination(self, dispatcher):
        result = dispatcher.dispatch(
            "generate-travel-inspiration",
            {"content_type": "ARTICLE", "theme": "LUXURY", "target_destination": "Atlantis"},
        )

        assert result.status_code == 404


class TestSeasonalTool:
    """계절 인사이트 도구 테스트."""

    def test_barcelona_in_september(self, dispatcher):
        payload = dispatcher.dispatch(
            "get-seasonal-insights",
            {"destination": "Barcelona", "month": "September"},
        ).payload

        overview = payload["seasonal_overview"]
        assert overview["season"] == "Fall"
        assert overview["is_best_time"] is True
        assert overview["overall_rating"] == "Excellent"
        assert [event["event_name"] for event in payload["events"]] == ["La Mercè Festival"]
        assert payload["events"][0]["dates"] == "2025-09-24 - 2025-09-27"
        assert payload["weather"]["average_temp_c"] == 25.0

    def test_month_defaults_to_current_month(self, dispatcher):
        payload = dispatcher.dispatch("get-seasonal-insights", {"destination": "Dubai"}).payload

        assert payload["seasonal_overview"]["month"] == "September"
        assert payload["seasonal_overview"]["is_best_time"] is False
        assert payload["seasonal_overview"]["overall_rating"] == "Fair"

    def test_events_and_weather_can_be_excluded(self, dispatcher):
        payload = dispatcher.dispatch(
            "get-seasonal-insights",
            {"destination": "Barcelona", "month": "may", "include_events": False, "include_weather": False},
        ).payload

        assert payload["events"] == []
        assert "weather" not in payload

    def test_invalid_month(self, dispatcher):
        result = dispatcher.dispatch("get-seasonal-insights", {"destination": "Barcelona", "month": "Smarch"})

        assert result.status_code == 422


class TestLocalInsightsTool:
    """현지 인사이트 도구 테스트."""

    def test_money_category_only(self, dispatcher):
        payload = dispatcher.dispatch(
            "get-local-insights",
            {"destination": "Barcelona", "insight_categories": ["MONEY"]},
        ).payload

        assert "tipping_customs" in payload["cultural_insights"]
        assert "greetings" not in payload["cultural_insights"]
        assert "dress_code" not in payload["cultural_insights"]
        assert payload["practical_tips"]["money_saving_tips"]
        assert "language_basics" not in payload["practical_tips"]
        assert payload["insider_secrets"]
        assert payload["common_tourist_mistakes"]

    def test_all_categories_by_default(self, dispatcher):
        payload = dispatcher.dispatch("get-local-insights", {"destination": "Tokyo"}).payload

        assert set(payload["cultural_insights"]) == {
            "greetings",
            "tipping_customs",
            "dress_code",
            "business_etiquette",
            "dos_and_donts",
        }
        assert set(payload["practical_tips"]) == {
            "best_way_to_get_around",
            "money_saving_tips",
            "safety_considerations",
            "language_basics",
        }


class TestAnalyticsTool:
    """콘텐츠 성과 분석 도구 테스트."""

    def test_seeded_content_is_counted(self, dispatcher):
        payload = dispatcher.dispatch("analyze-content-performance", {"analysis_period": WIDE_PERIOD}).payload

        assert payload["summary"]["total_content_views"] == 0
        assert payload["summary"]["conversion_rate"] == 0.0
        assert payload["summary"]["average_time_on_page"] == 180
        assert payload["top_performing_destinations"] == []
        assert payload["content_insights"][0]["insight"] == "Conversion rates below industry average (5-8%)"

    def test_surfaced_recommendations_become_views(self, dispatcher):
        dispatcher.dispatch("recommend-destinations", {"passenger_id": SAMPLE_PASSENGER_ID, "recommendation_count": 2})

        payload = dispatcher.dispatch("analyze-content-performance", {"analysis_period": WIDE_PERIOD}).payload

        top = payload["top_performing_destinations"]
        assert len(top) == 2
        assert all(item["views"] == 1 and item["bookings"] == 0 for item in top)

    def test_reversed_period_is_rejected(self, dispatcher):
        result = dispatcher.dispatch(
            "analyze-content-performance",
            {"analysis_period": {"start_date": "2025-02-01T00:00:00Z", "end_date": "2025-01-01T00:00:00Z"}},
        )

        assert result.status_code == 422

    def test_mixed_timezone_period_is_accepted(self, dispatcher):
        """시간대가 없는 날짜는 UTC로 간주해 시간대가 있는 날짜와 비교한다."""
        result = dispatcher.dispatch(
            "analyze-content-performance",
            {"analysis_period": {"start_date": "2025-01-01", "end_date": "2025-12-31T00:00:00+09:00"}},
        )

        assert result.status_code == 200
        assert result.payload["summary"]["average_time_on_page"] == 180

    def test_mixed_timezone_reversed_period_is_rejected(self, dispatcher):
        result = dispatcher.dispatch(
            "analyze-content-performance",
            {"analysis_period": {"start_date": "2025-12-31T00:00:00+09:00", "end_date": "2025-01-01T00:00:00"}},
        )

        assert result.status_code == 422
        assert result.payload["tool"] == "analyze-content-performance"

    def test_date_only_end_covers_the_whole_day(self):
        period = AnalysisPeriod.model_validate({"start_date": "2025-01-01", "end_date": "2025-01-31"})

        assert period.start_date == datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert period.end_date == datetime(2025, 1, 31, 23, 59, 59, 999999, tzinfo=timezone.utc)


class TestCompareTool:
    """여행지 비교 도구 테스트."""

    def test_cost_winner_is_cheapest(self, dispatcher):
        payload = dispatcher.dispatch(
            "compare-destinations",
            {"destinations": ["Tokyo", "barcelona"], "comparison_criteria": ["COST"]},
        ).payload

        row = payload["comparison_matrix"]["criteria"][0]
        assert payload["comparison_matrix"]["destinations"] == ["Tokyo", "Barcelona"]
        assert row["criterion"] == "Average Daily Cost"
        assert row["values"] == {"Tokyo": "$150/day", "Barcelona": "$120/day"}
        assert row["winner"] == "Barcelona"
        assert payload["recommendation"]["best_for_budget"] == "Barcelona"
        assert payload["recommendation"]["best_for_weather"] == "Tokyo"

    def test_default_criteria(self, dispatcher):
        payload = dispatcher.dispatch("compare-destinations", {"destinations": ["Barcelona", "Dubai"]}).payload

        criteria = [row["criterion"] for row in payload["comparison_matrix"]["criteria"]]
        assert criteria == [
            "Average Daily Cost",
            "Average Temperature (Current Month)",
            "Popular Activities",
            "Destination Type",
        ]
        weather = payload["comparison_matrix"]["criteria"][1]
        assert weather["values"] == {"Barcelona": "25°C", "Dubai": "35°C"}
        assert "winner" not in weather

    def test_food_row_has_no_winner(self, dispatcher):
        payload = dispatcher.dispatch(
            "compare-destinations",
            {"destinations": ["Cartagena", "Panama City"], "comparison_criteria": ["FOOD"]},
        ).payload

        row = payload["comparison_matrix"]["criteria"][0]
        assert row["criterion"] == "Local Cuisine"
        assert "winner" not in row

    @pytest.mark.parametrize(
        "destinations",
        [["Barcelona"], ["Barcelona", "Tokyo", "Dubai", "Cartagena", "Panama City"], ["Tokyo", "tokyo"]],
    )
    def test_invalid_destination_counts(self, dispatcher, destinations):
        with pytest.raises(InvalidInputError):
            dispatcher.invoke("compare-destinations", {"destinations": destinations})

    def test_missing_destination(self, dispatcher):
        result = dispatcher.dispatch("compare-destinations", {"destinations": ["Barcelona", "Atlantis"]})

        assert result.status_code == 404
        assert result.payload["error"] == "One or more destinations not found"

    def test_weather_pick_is_injectable(self, tool_context):
        response = compare_destinations(
            tool_context,
            CompareRequest(destinations=["Tokyo", "Dubai"]),
            best_for_weather=lambda destinations, month: max(
                destinations, key=lambda d: d.temperature_for(month)
            ),
        )

        assert response.recommendation.best_for_weather == "Dubai"
