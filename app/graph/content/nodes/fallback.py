"""3단계: 결정적 폴백 노드."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from app.core.logger import get_logger
from app.graph.content.state import ContentState
from app.graph.content.strategy import ContentStrategy

logger = get_logger(__name__)


def compose_fallback(state: ContentState, config: RunnableConfig) -> ContentState:
    strategy: ContentStrategy = config["configurable"]["strategy"]
    reason = state.get("fallback_reason") or "enrichment unavailable"
    logger.info("결정적 폴백 사용 [%s]: %s", strategy.kind, reason)
    return {**state, "artifact": strategy.fallback(), "provenance": "FALLBACK", "fallback_reason": reason}
