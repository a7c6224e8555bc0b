"""생성 결과 저장 노드."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from app.graph.content.state import ContentState
from app.graph.content.strategy import ContentStrategy
from app.services.side_channel import BestEffortWriter


def persist_generated(state: ContentState, config: RunnableConfig) -> ContentState:
    """생성된 결과물을 다음 요청의 템플릿으로 저장합니다. 실패해도 응답은 유지됩니다."""
    configurable = config["configurable"]
    if not configurable.get("persist_generated", True):
        return {**state, "persisted": False}

    strategy: ContentStrategy = configurable["strategy"]
    writer: BestEffortWriter = configurable["writer"]
    generated = state["generated"]
    artifact = state["artifact"]

    persisted = writer.submit(f"{strategy.kind}.persist", lambda: strategy.persist(generated, artifact))
    return {**state, "persisted": persisted}
