"""콘텐츠 해석(템플릿 재사용 → 생성형 보강 → 결정적 폴백) 그래프."""

from app.graph.content.strategy import ContentStrategy, TemplateHit
from app.graph.content.workflow import ResolvedContent, compiled_content_graph, resolve_content

__all__ = ["ContentStrategy", "TemplateHit", "ResolvedContent", "compiled_content_graph", "resolve_content"]
