"""2단계: 생성형 보강 노드."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from app.core.errors import EnrichmentError
from app.core.logger import get_logger
from app.graph.content.state import ContentState
from app.graph.content.strategy import ContentStrategy
from app.services.enrichment import ConfiguredEnricher

logger = get_logger(__name__)


def synthesize_content(state: ContentState, config: RunnableConfig) -> ContentState:
    """보강기를 호출하고 결과를 저장소 데이터와 병합합니다.

    보강 실패나 구조 불일치는 오류로 올리지 않고 `fallback_reason`에 기록합니다.
    """
    configurable = config["configurable"]
    strategy: ContentStrategy = configurable["strategy"]
    enricher = configurable["enricher"]

    if not isinstance(enricher, ConfiguredEnricher):
        return {**state, "fallback_reason": "enrichment unavailable"}

    try:
        generated = enricher.enrich(strategy.build_prompt(), strategy.schema)
        artifact = strategy.merge(generated)
    except (EnrichmentError, ValueError) as exc:
        logger.warning("생성 단계 실패, 폴백으로 전환 [%s]: %s", strategy.kind, exc)
        return {**state, "generated": None, "fallback_reason": str(exc)}

    return {**state, "generated": generated, "artifact": artifact, "provenance": "GENERATED"}
