"""설정 정규화 테스트."""

from app.core.config import Settings


class TestSettingsClamps:
    """범위를 벗어난 설정값 보정 테스트."""

    def test_min_recommendation_score_is_clamped(self):
        assert Settings(MIN_RECOMMENDATION_SCORE=150).MIN_RECOMMENDATION_SCORE == 100
        assert Settings(MIN_RECOMMENDATION_SCORE=-3).MIN_RECOMMENDATION_SCORE == 0
        assert Settings(MIN_RECOMMENDATION_SCORE="abc").MIN_RECOMMENDATION_SCORE == 0

    def test_llm_temperature_is_clamped(self):
        assert Settings(LLM_TEMPERATURE=3.5).LLM_TEMPERATURE == 2.0
        assert Settings(LLM_TEMPERATURE="warm").LLM_TEMPERATURE == 0.7

    def test_max_content_length_has_floor(self):
        assert Settings(MAX_CONTENT_LENGTH=10).MAX_CONTENT_LENGTH == 100


class TestEnrichmentConfigured:
    def test_requires_api_key(self):
        assert Settings(OPENAI_API_KEY=None).enrichment_configured is False
        assert Settings(OPENAI_API_KEY="   ").enrichment_configured is False

    def test_can_be_disabled(self):
        assert Settings(OPENAI_API_KEY="test-key", ENRICHMENT_ENABLED=False).enrichment_configured is False
        assert Settings(OPENAI_API_KEY="test-key").enrichment_configured is True
