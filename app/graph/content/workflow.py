"""콘텐츠 해석 그래프 워크플로우 구성."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from langgraph.graph import END, StateGraph

from app.graph.content.nodes import compose_fallback, lookup_template, persist_generated, synthesize_content
from app.graph.content.state import ContentState
from app.graph.content.strategy import ContentStrategy
from app.schemas.records import Provenance
from app.services.enrichment import ConfiguredEnricher, Enricher
from app.services.side_channel import BestEffortWriter


def _route_after_lookup(state: ContentState) -> str:
    """템플릿 적중 여부와 보강 가능 여부에 따라 다음 노드를 결정합니다."""
    if state.get("provenance") == "TEMPLATE":
        return "resolved"
    if state.get("enrichment_available"):
        return "synthesize"
    return "fallback"


def _route_after_synthesize(state: ContentState) -> str:
    if state.get("provenance") == "GENERATED":
        return "persist"
    return "fallback"


def _create_content_workflow() -> StateGraph:
    """콘텐츠 해석 그래프 워크플로우를 생성합니다."""
    workflow = StateGraph(ContentState)

    workflow.add_node("lookup_template", lookup_template)
    workflow.add_node("synthesize", synthesize_content)
    workflow.add_node("persist", persist_generated)
    workflow.add_node("fallback", compose_fallback)

    workflow.set_entry_point("lookup_template")
    workflow.add_conditional_edges(
        "lookup_template",
        _route_after_lookup,
        {"resolved": END, "synthesize": "synthesize", "fallback": "fallback"},
    )
    workflow.add_conditional_edges("synthesize", _route_after_synthesize, ["persist", "fallback"])
    workflow.add_edge("persist", END)
    workflow.add_edge("fallback", END)

    return workflow


compiled_content_graph = _create_content_workflow().compile()


@dataclass(frozen=True, slots=True)
class ResolvedContent:
    artifact: Any
    provenance: Provenance


def resolve_content(
    strategy: ContentStrategy,
    enricher: Enricher,
    writer: BestEffortWriter,
    *,
    persist_generated: bool = True,
) -> ResolvedContent:
    """전략에 따라 템플릿 → 생성 → 폴백 순으로 결과물을 해석합니다."""
    initial_state: ContentState = {
        "content_kind": strategy.kind,
        "enrichment_available": isinstance(enricher, ConfiguredEnricher),
    }
    result = compiled_content_graph.invoke(
        initial_state,
        config={
            "configurable": {
                "strategy": strategy,
                "enricher": enricher,
                "writer": writer,
                "persist_generated": persist_generated,
            }
        },
    )
    return ResolvedContent(artifact=result["artifact"], provenance=result["provenance"])
