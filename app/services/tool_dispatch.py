"""도구 호출 파사드.

HTTP/MCP 전송 계층은 모두 `ToolDispatcher`를 통해 도구를 호출합니다.
입력 검증, 서비스 호출, 직렬화, 오류 envelope 변환이 여기서 이루어집니다.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import (
    STORAGE_UNAVAILABLE_MESSAGE,
    InvalidInputError,
    NotFoundError,
    ToolError,
    build_error_envelope,
    invalid_input_from_validation,
)
from app.core.logger import get_logger
from app.schemas.activities import DiningRequest, ThingsToDoRequest
from app.schemas.analytics import ContentPerformanceRequest
from app.schemas.compare import CompareRequest
from app.schemas.guide import GuideRequest
from app.schemas.insights import LocalInsightsRequest, SeasonalInsightsRequest
from app.schemas.inspiration import InspirationRequest
from app.schemas.itinerary import ItineraryRequest
from app.schemas.recommend import RecommendRequest
from app.services.activity_service import get_things_to_do
from app.services.analytics_service import analyze_content_performance
from app.services.compare_service import compare_destinations
from app.services.context import ToolContext, build_tool_context
from app.services.dining_service import get_dining_recommendations
from app.services.guide_service import get_destination_guide
from app.services.inspiration_service import generate_travel_inspiration
from app.services.itinerary_service import generate_personalized_itinerary
from app.services.local_insight_service import get_local_insights
from app.services.recommend_service import recommend_destinations
from app.services.seasonal_service import get_seasonal_insights

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ToolSpec:
    name: str
    description: str
    request_model: type[BaseModel]
    handler: Callable[[ToolContext, Any], BaseModel]

    def input_schema(self) -> dict[str, Any]:
        return self.request_model.model_json_schema()


DEFAULT_TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="get-destination-guide",
        description="Get a destination guide with overview, things to do, dining, culture and practical info",
        request_model=GuideRequest,
        handler=get_destination_guide,
    ),
    ToolSpec(
        name="generate-personalized-itinerary",
        description="Create a day-by-day itinerary (1-30 days) tailored to the traveler profile",
        request_model=ItineraryRequest,
        handler=generate_personalized_itinerary,
    ),
    ToolSpec(
        name="recommend-destinations",
        description="Recommend destinations ranked by match score against traveler preferences",
        request_model=RecommendRequest,
        handler=recommend_destinations,
    ),
    ToolSpec(
        name="get-things-to-do",
        description="List activities and attractions filtered by type and budget, with curated collections",
        request_model=ThingsToDoRequest,
        handler=get_things_to_do,
    ),
    ToolSpec(
        name="get-dining-recommendations",
        description="Recommend restaurants and food experiences by cuisine, price level and occasion",
        request_model=DiningRequest,
        handler=get_dining_recommendations,
    ),
    ToolSpec(
        name="generate-travel-inspiration",
        description="Create inspirational travel content for marketing channels",
        request_model=InspirationRequest,
        handler=generate_travel_inspiration,
    ),
    ToolSpec(
        name="get-seasonal-insights",
        description="Get weather, events, crowd levels and packing tips for a destination and month",
        request_model=SeasonalInsightsRequest,
        handler=get_seasonal_insights,
    ),
    ToolSpec(
        name="analyze-content-performance",
        description="Analyze inspiration content performance and destination conversions",
        request_model=ContentPerformanceRequest,
        handler=analyze_content_performance,
    ),
    ToolSpec(
        name="get-local-insights",
        description="Get cultural customs, etiquette and practical local tips",
        request_model=LocalInsightsRequest,
        handler=get_local_insights,
    ),
    ToolSpec(
        name="compare-destinations",
        description="Compare 2-4 destinations side by side",
        request_model=CompareRequest,
        handler=compare_destinations,
    ),
)


@dataclass(frozen=True, slots=True)
class ToolResult:
    """도구 호출 결과. 실패 시 `payload`는 오류 envelope입니다."""

    tool: str
    payload: dict[str, Any]
    status_code: int = 200

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400


class ToolDispatcher:
    """등록된 도구를 이름으로 찾아 실행합니다."""

    def __init__(self, context: ToolContext, tools: Iterable[ToolSpec] = DEFAULT_TOOLS) -> None:
        self._context = context
        self._tools = {tool.name: tool for tool in tools}

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def catalog(self) -> list[dict[str, Any]]:
        return [
            {"name": tool.name, "description": tool.description, "input_schema": tool.input_schema()}
            for tool in self._tools.values()
        ]

    def invoke(self, name: str, arguments: dict[str, Any] | None) -> BaseModel:
        """도구를 실행해 응답 모델을 반환합니다.

        Raises:
            NotFoundError: 알 수 없는 도구 이름 또는 여행지.
            InvalidInputError: 입력 검증 실패.
        """
        tool = self._tools.get(name)
        if tool is None:
            raise NotFoundError(f"Unknown tool: {name}")

        try:
            request = tool.request_model.model_validate(arguments or {})
        except ValidationError as exc:
            raise invalid_input_from_validation(exc) from exc

        logger.info("도구 호출: %s", name)
        return tool.handler(self._context, request)

    def dispatch(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """도구를 실행하고 성공 페이로드 또는 오류 envelope을 반환합니다.

        알 수 없는 도구, 입력 오류, 여행지 없음, 핵심 조회 경로의 저장소 오류(503)를
        envelope으로 변환하며 그 밖의 예외는 전송 계층으로 전파됩니다.
        """
        try:
            response = self.invoke(name, arguments)
        except ToolError as exc:
            log = logger.info if isinstance(exc, (NotFoundError, InvalidInputError)) else logger.warning
            log("도구 오류 [%s]: %s", name, exc.message)
            envelope = build_error_envelope(name, exc.message, self._context.now())
            return ToolResult(tool=name, payload=envelope, status_code=exc.status_code)
        except SQLAlchemyError as exc:
            logger.error("도구 저장소 오류 [%s]: %s", name, exc)
            envelope = build_error_envelope(name, STORAGE_UNAVAILABLE_MESSAGE, self._context.now())
            return ToolResult(tool=name, payload=envelope, status_code=503)

        return ToolResult(tool=name, payload=response.model_dump(mode="json", exclude_none=True))


@lru_cache
def get_tool_dispatcher() -> ToolDispatcher:
    """운영용 디스패처를 반환한다. 최초 호출 시에만 생성되고 이후 캐싱된다."""
    return ToolDispatcher(build_tool_context())
