"""1단계: 템플릿 조회 노드."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from app.core.logger import get_logger
from app.graph.content.state import ContentState
from app.graph.content.strategy import ContentStrategy
from app.services.side_channel import BestEffortWriter

logger = get_logger(__name__)


def lookup_template(state: ContentState, config: RunnableConfig) -> ContentState:
    """구조 키에 맞는 저장 결과물을 찾고, 적중 시 재사용 카운터를 갱신합니다."""
    configurable = config["configurable"]
    strategy: ContentStrategy = configurable["strategy"]
    writer: BestEffortWriter = configurable["writer"]

    hit = strategy.lookup()
    if hit is None:
        return {**state, "artifact": None}

    if hit.on_reuse is not None:
        writer.submit(f"{strategy.kind}.reuse", hit.on_reuse)

    logger.info("템플릿 적중: %s", strategy.kind)
    return {**state, "artifact": hit.artifact, "provenance": "TEMPLATE"}
