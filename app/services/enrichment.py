"""생성형 보강(enrichment) 기능.

시작 시점에 한 번 `build_enricher`로 구성되어 콘텐츠 해석기에 주입됩니다.
미설정 상태는 None이 아니라 `UnconfiguredEnricher` 변형으로 표현됩니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_core.output_parsers import PydanticOutputParser
from langchain_openai import ChatOpenAI
from openai import APITimeoutError
from pydantic import BaseModel

from app.core.config import Settings, get_settings
from app.core.errors import EnrichmentError
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy

logger = get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


@dataclass(frozen=True, slots=True)
class EnrichmentPrompt:
    """구조화된 프롬프트. 출력 형식 지시문은 보강기가 스키마로부터 덧붙입니다."""

    system: str
    user: str


def strip_code_fence(text: str) -> str:
    """코드 펜스를 제거합니다."""
    content = (text or "").strip()
    if content.startswith("```"):
        parts = content.split("```")
        if len(parts) > 1:
            content = parts[1].strip()
            if content.startswith("json"):
                content = content[4:].strip()
    return content.strip()


def _message_text(content: object) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(part.get("text", "") if isinstance(part, dict) else str(part) for part in content)
    return str(content or "")


class ConfiguredEnricher:
    """ChatOpenAI 기반 보강기."""

    def __init__(self, llm: BaseChatModel) -> None:
        self._llm = llm

    def enrich(self, prompt: EnrichmentPrompt, schema: type[SchemaT]) -> SchemaT:
        """프롬프트를 실행하고 응답을 `schema`로 파싱합니다.

        Raises:
            EnrichmentError: 공급자 오류, 타임아웃, 스키마 불일치 응답.
        """
        parser = PydanticOutputParser(pydantic_object=schema)
        messages = [
            SystemMessage(content=prompt.system),
            HumanMessage(content=f"{prompt.user}\n\n{parser.get_format_instructions()}"),
        ]

        try:
            response = self._llm.invoke(messages)
            return parser.parse(strip_code_fence(_message_text(response.content)))
        except APITimeoutError as exc:
            logger.warning("Enrichment 타임아웃 (%s)", schema.__name__)
            raise EnrichmentError(f"{schema.__name__} enrichment timed out") from exc
        except Exception as exc:
            logger.warning("Enrichment 실패 (%s): %s", schema.__name__, exc)
            raise EnrichmentError(f"{schema.__name__} enrichment failed: {exc}") from exc


@dataclass(frozen=True, slots=True)
class UnconfiguredEnricher:
    """보강을 사용할 수 없는 상태와 그 이유."""

    reason: str


Enricher = ConfiguredEnricher | UnconfiguredEnricher


def build_enricher(settings: Settings | None = None) -> Enricher:
    """설정으로부터 보강기 변형을 구성합니다."""
    resolved_settings = settings or get_settings()

    if not resolved_settings.ENRICHMENT_ENABLED:
        return UnconfiguredEnricher(reason="ENRICHMENT_ENABLED=false")
    if not (resolved_settings.OPENAI_API_KEY or "").strip():
        return UnconfiguredEnricher(reason="OPENAI_API_KEY is not set")

    timeout_policy = get_timeout_policy(resolved_settings)
    llm = ChatOpenAI(
        model=resolved_settings.LLM_MODEL_NAME,
        temperature=resolved_settings.LLM_TEMPERATURE,
        api_key=resolved_settings.OPENAI_API_KEY,
        request_timeout=timeout_policy.llm_timeout_seconds,
        max_retries=0,
    )
    logger.info(
        "Enrichment configured: model=%s timeout=%ss",
        resolved_settings.LLM_MODEL_NAME,
        timeout_policy.llm_timeout_seconds,
    )
    return ConfiguredEnricher(llm)
