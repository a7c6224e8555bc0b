"""콘텐츠 해석 그래프 상태 정의."""

from typing import Any, TypedDict


class ContentState(TypedDict, total=False):
    """콘텐츠 해석 그래프 상태.

    Keys:
        content_kind: 해석 대상 콘텐츠 종류 (로그/라벨 용도)
        enrichment_available: 생성형 보강 사용 가능 여부
        artifact: 해석된 결과물
        generated: 생성형 보강 원본 결과 (병합 전)
        provenance: TEMPLATE | GENERATED | FALLBACK
        fallback_reason: 결정적 폴백으로 내려간 이유
        persisted: 생성 결과 저장 성공 여부
    """

    content_kind: str
    enrichment_available: bool
    artifact: Any
    generated: Any
    provenance: str | None
    fallback_reason: str | None
    persisted: bool
