"""콘텐츠 해석 그래프(템플릿 → 생성 → 폴백) 테스트."""

from __future__ import annotations

from dataclasses import replace

from pydantic import BaseModel
from sqlalchemy.exc import OperationalError

from app.core.errors import EnrichmentError
from app.graph.content import ContentStrategy, TemplateHit, resolve_content
from app.models.destination import Destination
from app.schemas.guide import GeneratedIntroduction, GuideRequest
from app.schemas.inspiration import GeneratedInspiration, InspirationRequest
from app.schemas.itinerary import GeneratedItinerary, ItineraryRequest
from app.services.enrichment import EnrichmentPrompt, UnconfiguredEnricher
from app.services.guide_service import get_destination_guide
from app.services.inspiration_service import generate_travel_inspiration
from app.services.itinerary_service import generate_personalized_itinerary
from app.services.side_channel import BestEffortWriter
from tests.mocks.fake_enricher import FakeEnricher


class Blurb(BaseModel):
    text: str


class BlurbStrategy(ContentStrategy[str, Blurb]):
    kind = "blurb"
    schema = Blurb

    def __init__(self, template: str | None = None, on_reuse=None) -> None:
        self.template = template
        self.on_reuse = on_reuse
        self.persisted: list[str] = []

    def lookup(self) -> TemplateHit[str] | None:
        if self.template is None:
            return None
        return TemplateHit(artifact=self.template, on_reuse=self.on_reuse)

    def build_prompt(self) -> EnrichmentPrompt:
        return EnrichmentPrompt(system="system", user="write a blurb")

    def merge(self, generated: Blurb) -> str:
        if not generated.text:
            raise ValueError("empty blurb")
        return generated.text

    def persist(self, generated: Blurb, artifact: str) -> object:
        self.persisted.append(artifact)
        return artifact

    def fallback(self) -> str:
        return "fallback blurb"


def _schedule_day(day: int) -> dict:
    slot = {"activity": f"Activity {day}", "location": "Barcelona", "duration": "2 hours"}
    return {"day": day, "theme": f"Day {day}", "morning": slot, "afternoon": slot, "evening": slot}


def _with_enricher(tool_context, enricher):
    return replace(tool_context, enricher=enricher)


class TestResolveContent:
    """resolve_content 라우팅 테스트."""

    def test_template_hit_skips_enrichment(self):
        """템플릿 적중 시 보강기를 호출하지 않고 재사용 콜백을 실행한다."""
        reused: list[bool] = []
        enricher = FakeEnricher(responses={Blurb: {"text": "generated"}})

        resolved = resolve_content(
            BlurbStrategy(template="stored blurb", on_reuse=lambda: reused.append(True)),
            enricher,
            BestEffortWriter(),
        )

        assert resolved.artifact == "stored blurb"
        assert resolved.provenance == "TEMPLATE"
        assert reused == [True]
        assert enricher.prompts == []

    def test_unconfigured_enricher_goes_to_fallback(self):
        resolved = resolve_content(BlurbStrategy(), UnconfiguredEnricher(reason="test"), BestEffortWriter())

        assert resolved.artifact == "fallback blurb"
        assert resolved.provenance == "FALLBACK"

    def test_generated_result_is_persisted(self):
        strategy = BlurbStrategy()

        resolved = resolve_content(strategy, FakeEnricher(responses={Blurb: {"text": "fresh"}}), BestEffortWriter())

        assert resolved.artifact == "fresh"
        assert resolved.provenance == "GENERATED"
        assert strategy.persisted == ["fresh"]

    def test_persistence_can_be_disabled(self):
        strategy = BlurbStrategy()

        resolved = resolve_content(
            strategy,
            FakeEnricher(responses={Blurb: {"text": "fresh"}}),
            BestEffortWriter(),
            persist_generated=False,
        )

        assert resolved.provenance == "GENERATED"
        assert strategy.persisted == []

    def test_enrichment_error_falls_back(self):
        resolved = resolve_content(
            BlurbStrategy(),
            FakeEnricher(error=EnrichmentError("provider timeout")),
            BestEffortWriter(),
        )

        assert resolved.provenance == "FALLBACK"

    def test_merge_rejection_falls_back(self):
        resolved = resolve_content(BlurbStrategy(), FakeEnricher(responses={Blurb: {"text": ""}}), BestEffortWriter())

        assert resolved.provenance == "FALLBACK"

    def test_failed_reuse_write_does_not_fail_resolution(self):
        """재사용 카운터 갱신 실패는 결과에 영향을 주지 않는다."""

        def _broken_write():
            raise OperationalError("UPDATE", {}, Exception("database is locked"))

        resolved = resolve_content(
            BlurbStrategy(template="stored blurb", on_reuse=_broken_write),
            UnconfiguredEnricher(reason="test"),
            BestEffortWriter(),
        )

        assert resolved.provenance == "TEMPLATE"


class TestItineraryResolution:
    """일정 해석 단계별 테스트 (시드 데이터 기반)."""

    def test_template_reuse_increments_usage(self, tool_context):
        """Barcelona 3일 커플 템플릿 재사용 시 사용 횟수가 1 증가한다."""
        repository = tool_context.repository
        destination = repository.find_destination("Barcelona")
        before = repository.find_itinerary_template(destination.id, 3, "COUPLES")

        response = generate_personalized_itinerary(
            tool_context,
            ItineraryRequest(destination="barcelona", duration_days=3, traveler_profile={"traveler_type": "COUPLE"}),
        )

        after = repository.find_itinerary_template(destination.id, 3, "COUPLES")
        assert response.provenance == "TEMPLATE"
        assert len(response.daily_schedule) == 3
        assert after.usage_count == before.usage_count + 1

    def test_reused_template_is_returned_unchanged(self, tool_context):
        """템플릿 재사용 결과는 저장된 일정과 바이트 단위로 같고 호출마다 동일하다."""
        repository = tool_context.repository
        destination = repository.find_destination("Barcelona")
        stored = repository.find_itinerary_template(destination.id, 3, "COUPLES")
        request = ItineraryRequest(destination="Barcelona", duration_days=3, traveler_profile={"traveler_type": "COUPLE"})

        first = generate_personalized_itinerary(tool_context, request)
        second = generate_personalized_itinerary(tool_context, request)

        assert [day.model_dump_json() for day in first.daily_schedule] == [
            day.model_dump_json() for day in stored.daily_schedule
        ]
        assert second.model_dump_json() == first.model_dump_json()
        assert repository.find_itinerary_template(destination.id, 3, "COUPLES").usage_count == stored.usage_count + 2

    def test_unconfigured_fallback_has_exact_day_count(self, tool_context):
        response = generate_personalized_itinerary(
            tool_context,
            ItineraryRequest(destination="Tokyo", duration_days=5),
        )

        assert response.provenance == "FALLBACK"
        assert [day.day for day in response.daily_schedule] == [1, 2, 3, 4, 5]
        assert response.daily_schedule[0].theme == "Arrival & City Introduction"
        assert response.daily_schedule[0].morning.activity == "Senso-ji Temple"
        assert response.daily_schedule[0].meals.lunch == "Try Sushi"
        assert response.budget_breakdown.total_per_day == 150.0

    def test_must_see_attractions_lead_fallback_schedule(self, tool_context):
        response = generate_personalized_itinerary(
            tool_context,
            ItineraryRequest(
                destination="Tokyo",
                duration_days=1,
                traveler_profile={"must_see_attractions": ["Meiji Shrine"]},
            ),
        )

        assert response.daily_schedule[0].morning.activity == "Meiji Shrine"

    def test_generated_itinerary_is_cached_as_template(self, tool_context):
        generated = GeneratedItinerary(
            overview="Two packed days in Dubai",
            daily_schedule=[_schedule_day(1), _schedule_day(2)],
            packing_list=["Sunscreen"],
        )
        context = _with_enricher(tool_context, FakeEnricher(responses={GeneratedItinerary: generated}))
        request = ItineraryRequest(destination="Dubai", duration_days=2)

        first = generate_personalized_itinerary(context, request)
        second = generate_personalized_itinerary(context, request)

        assert first.provenance == "GENERATED"
        assert first.itinerary.overview == "Two packed days in Dubai"
        assert first.budget_breakdown.total_per_day == 200.0
        assert second.provenance == "TEMPLATE"
        assert [day.day for day in second.daily_schedule] == [1, 2]

    def test_alternative_options_are_kept_within_trip_days(self, tool_context):
        generated = GeneratedItinerary(
            overview="Two days in Dubai",
            daily_schedule=[_schedule_day(1), _schedule_day(2)],
            alternative_options=[
                {
                    "day": 2,
                    "original_activity": "Activity 2",
                    "alternative": "Dubai Mall Aquarium",
                    "reason": "Too hot outdoors",
                },
                {"day": 5, "original_activity": "Desert safari", "alternative": "Spa", "reason": "Out of range"},
            ],
        )
        context = _with_enricher(tool_context, FakeEnricher(responses={GeneratedItinerary: generated}))

        response = generate_personalized_itinerary(context, ItineraryRequest(destination="Dubai", duration_days=2))

        assert response.provenance == "GENERATED"
        assert [option.model_dump() for option in response.alternative_options] == [
            {
                "day": 2,
                "original_activity": "Activity 2",
                "alternative": "Dubai Mall Aquarium",
                "reason": "Too hot outdoors",
            }
        ]

    def test_wrong_day_count_from_enricher_falls_back(self, tool_context):
        generated = GeneratedItinerary(overview="Too short", daily_schedule=[_schedule_day(1)])
        context = _with_enricher(tool_context, FakeEnricher(responses={GeneratedItinerary: generated}))

        response = generate_personalized_itinerary(context, ItineraryRequest(destination="Dubai", duration_days=4))

        assert response.provenance == "FALLBACK"
        assert len(response.daily_schedule) == 4

    def test_failing_enricher_falls_back(self, tool_context):
        context = _with_enricher(tool_context, FakeEnricher(error=EnrichmentError("timeout")))

        response = generate_personalized_itinerary(context, ItineraryRequest(destination="Cartagena", duration_days=2))

        assert response.provenance == "FALLBACK"
        assert len(response.daily_schedule) == 2


class TestGuideOverviewResolution:
    """가이드 소개 문단 해석 테스트."""

    INTRODUCTION = (
        "Tokyo blends neon-lit skyscrapers with quiet temples and gardens. "
        "Start in Asakusa, wander Shibuya at dusk, and finish with late-night ramen in Shinjuku."
    )

    def test_generated_overview_is_saved_and_reused(self, tool_context, session_factory):
        with session_factory() as session, session.begin():
            session.query(Destination).filter(Destination.city == "Tokyo").update(
                {Destination.long_description: None}, synchronize_session=False
            )
        enricher = FakeEnricher(responses={GeneratedIntroduction: {"introduction": self.INTRODUCTION}})
        context = _with_enricher(tool_context, enricher)
        request = GuideRequest(destination="Tokyo", guide_sections=["OVERVIEW"])

        first = get_destination_guide(context, request)
        second = get_destination_guide(context, request)

        assert first.overview.provenance == "GENERATED"
        assert first.overview.introduction == self.INTRODUCTION
        assert second.overview.provenance == "TEMPLATE"
        assert second.overview.introduction == self.INTRODUCTION
        assert len(enricher.prompts) == 1

        destination = tool_context.repository.find_destination("Tokyo")
        saved = tool_context.repository.list_published_guides(destination.id, ["OVERVIEW"])
        assert [guide.author for guide in saved] == ["AI Travel Writer"]

    def test_long_description_is_used_without_enrichment(self, tool_context):
        enricher = FakeEnricher(responses={GeneratedIntroduction: {"introduction": self.INTRODUCTION}})

        response = get_destination_guide(
            _with_enricher(tool_context, enricher),
            GuideRequest(destination="Tokyo", guide_sections=["OVERVIEW"]),
        )

        assert response.overview.provenance == "TEMPLATE"
        assert enricher.prompts == []


class TestInspirationResolution:
    """영감 콘텐츠 해석 테스트."""

    def test_generated_piece_is_saved_and_reused(self, tool_context):
        generated = {
            "title": "Cartagena After Dark",
            "subtitle": "Walls, waves and warm nights",
            "body": "## Sunset on the walls\nWalk the old city walls as the sea breeze picks up.",
            "call_to_action": "Book your Caribbean escape",
        }
        enricher = FakeEnricher(responses={GeneratedInspiration: generated})
        context = _with_enricher(tool_context, enricher)
        request = InspirationRequest(content_type="SOCIAL_POST", theme="BEACH", target_destination="Cartagena")

        first = generate_travel_inspiration(context, request)
        second = generate_travel_inspiration(context, request)

        assert first.provenance == "GENERATED"
        assert second.provenance == "TEMPLATE"
        assert second.content.title == "Cartagena After Dark"
        assert second.content.body == first.content.body
        assert len(enricher.prompts) == 1

    def test_caching_disabled_generates_every_time(self, tool_context):
        enricher = FakeEnricher(
            responses={
                GeneratedInspiration: {
                    "title": "Luxury in Dubai",
                    "subtitle": "Gold and glass",
                    "body": "Desert dunes by day, rooftop lounges by night.",
                    "call_to_action": "Reserve your suite",
                }
            }
        )
        settings = tool_context.settings.model_copy(update={"ENABLE_CONTENT_CACHING": False})
        context = replace(tool_context, enricher=enricher, settings=settings)
        request = InspirationRequest(content_type="EMAIL", theme="LUXURY", target_destination="Dubai")

        first = generate_travel_inspiration(context, request)
        second = generate_travel_inspiration(context, request)

        assert first.provenance == "GENERATED"
        assert second.provenance == "GENERATED"
        assert len(enricher.prompts) == 2
