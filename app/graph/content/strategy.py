"""콘텐츠 종류별 해석 전략 인터페이스."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from app.services.enrichment import EnrichmentPrompt

ArtifactT = TypeVar("ArtifactT")
GeneratedT = TypeVar("GeneratedT", bound=BaseModel)


@dataclass(frozen=True, slots=True)
class TemplateHit(Generic[ArtifactT]):
    """템플릿 조회 적중 결과. `on_reuse`는 재사용 카운터 갱신 같은 부가 쓰기입니다."""

    artifact: ArtifactT
    on_reuse: Callable[[], Any] | None = None


class ContentStrategy(ABC, Generic[ArtifactT, GeneratedT]):
    """요청 하나에 대한 3단계 해석 방법을 제공합니다.

    구현체는 요청 단위로 생성되며 해석 그래프의 `configurable`로 전달됩니다.
    어느 단계에서 만들어지든 결과물의 타입은 `ArtifactT` 하나입니다.
    """

    kind: str = "content"
    schema: type[GeneratedT]

    @abstractmethod
    def lookup(self) -> TemplateHit[ArtifactT] | None:
        """저장된 템플릿/캐시에서 구조 키가 일치하는 결과물을 찾습니다."""

    @abstractmethod
    def build_prompt(self) -> EnrichmentPrompt:
        """저장소의 사실 정보와 요청 파라미터로 보강 프롬프트를 만듭니다."""

    @abstractmethod
    def merge(self, generated: GeneratedT) -> ArtifactT:
        """생성 결과와 저장소 데이터를 병합합니다. 같은 필드는 저장소 값이 우선합니다.

        Raises:
            ValueError: 생성 결과가 요청 구조와 맞지 않는 경우.
        """

    def persist(self, generated: GeneratedT, artifact: ArtifactT) -> Any:
        """생성 결과를 재사용 가능한 템플릿으로 저장합니다. 기본은 저장하지 않습니다."""
        return None

    @abstractmethod
    def fallback(self) -> ArtifactT:
        """저장소 필드만으로 구조적으로 완전한 결과물을 합성합니다. 실패하지 않아야 합니다."""
