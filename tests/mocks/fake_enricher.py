"""생성형 보강 Mock.

실제 LLM 호출 없이 스키마별로 준비된 응답을 반환하거나 지정한 오류를 발생시킨다.
`ConfiguredEnricher`를 상속하므로 해석 그래프는 보강 가능 상태로 라우팅한다.
"""

from __future__ import annotations

from pydantic import BaseModel

from app.core.errors import EnrichmentError
from app.services.enrichment import ConfiguredEnricher, EnrichmentPrompt


class FakeEnricher(ConfiguredEnricher):
    """준비된 응답을 돌려주는 보강기."""

    def __init__(
        self,
        responses: dict[type[BaseModel], BaseModel | dict] | None = None,
        error: Exception | None = None,
    ) -> None:
        super().__init__(llm=None)
        self.responses = responses or {}
        self.error = error
        self.prompts: list[EnrichmentPrompt] = []

    def enrich(self, prompt: EnrichmentPrompt, schema: type[BaseModel]) -> BaseModel:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error

        response = self.responses.get(schema)
        if response is None:
            raise EnrichmentError(f"No canned response for {schema.__name__}")
        if isinstance(response, schema):
            return response
        return schema.model_validate(response)
