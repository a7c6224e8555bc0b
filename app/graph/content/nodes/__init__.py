"""콘텐츠 해석 그래프 노드 모음."""

from app.graph.content.nodes.fallback import compose_fallback
from app.graph.content.nodes.lookup import lookup_template
from app.graph.content.nodes.persist import persist_generated
from app.graph.content.nodes.synthesize import synthesize_content

__all__ = ["lookup_template", "synthesize_content", "persist_generated", "compose_fallback"]
