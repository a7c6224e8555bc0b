"""MCP(stdio) 전송 계층.

`python -m app.mcp_server`로 실행합니다. stdout은 MCP 프로토콜이 사용하므로 로그는 stderr로만 기록합니다.
모든 도구는 HTTP API와 동일하게 `ToolDispatcher`를 통해 실행됩니다.
"""

from __future__ import annotations

import json
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from app.core.logger import get_logger
from app.core.logging_config import configure_logging
from app.services.tool_dispatch import DEFAULT_TOOLS, get_tool_dispatcher

logger = get_logger(__name__)

mcp = FastMCP("destination-intelligence")

_DESCRIPTIONS = {tool.name: tool.description for tool in DEFAULT_TOOLS}


def _call(tool_name: str, **arguments: Any) -> dict[str, Any]:
    """값이 있는 인자만 모아 디스패처로 전달합니다. 오류 envelope은 `ToolError`로 변환합니다."""
    payload = {key: value for key, value in arguments.items() if value is not None}
    result = get_tool_dispatcher().dispatch(tool_name, payload)
    if result.is_error:
        raise ToolError(json.dumps(result.payload, ensure_ascii=False))
    return result.payload


@mcp.tool(name="get-destination-guide", description=_DESCRIPTIONS["get-destination-guide"])
def get_destination_guide(
    destination: str,
    guide_sections: list[str] | None = None,
    traveler_type: str | None = None,
    duration_days: int | None = None,
) -> dict:
    return _call(
        "get-destination-guide",
        destination=destination,
        guide_sections=guide_sections,
        traveler_type=traveler_type,
        duration_days=duration_days,
    )


@mcp.tool(name="generate-personalized-itinerary", description=_DESCRIPTIONS["generate-personalized-itinerary"])
def generate_personalized_itinerary(
    destination: str,
    duration_days: int,
    traveler_profile: dict | None = None,
    travel_dates: dict | None = None,
) -> dict:
    return _call(
        "generate-personalized-itinerary",
        destination=destination,
        duration_days=duration_days,
        traveler_profile=traveler_profile,
        travel_dates=travel_dates,
    )


@mcp.tool(name="recommend-destinations", description=_DESCRIPTIONS["recommend-destinations"])
def recommend_destinations(
    passenger_id: str | None = None,
    context: dict | None = None,
    constraints: dict | None = None,
    recommendation_count: int | None = None,
) -> dict:
    return _call(
        "recommend-destinations",
        passenger_id=passenger_id,
        context=context,
        constraints=constraints,
        recommendation_count=recommendation_count,
    )


@mcp.tool(name="get-things-to-do", description=_DESCRIPTIONS["get-things-to-do"])
def get_things_to_do(
    destination: str,
    activity_types: list[str] | None = None,
    traveler_type: str | None = None,
    date_range: dict | None = None,
    budget_per_person: float | None = None,
) -> dict:
    return _call(
        "get-things-to-do",
        destination=destination,
        activity_types=activity_types,
        traveler_type=traveler_type,
        date_range=date_range,
        budget_per_person=budget_per_person,
    )


@mcp.tool(name="get-dining-recommendations", description=_DESCRIPTIONS["get-dining-recommendations"])
def get_dining_recommendations(
    destination: str,
    cuisine_preferences: list[str] | None = None,
    dietary_restrictions: list[str] | None = None,
    price_level: str | None = None,
    occasion: str | None = None,
    meal_type: str | None = None,
) -> dict:
    return _call(
        "get-dining-recommendations",
        destination=destination,
        cuisine_preferences=cuisine_preferences,
        dietary_restrictions=dietary_restrictions,
        price_level=price_level,
        occasion=occasion,
        meal_type=meal_type,
    )


@mcp.tool(name="generate-travel-inspiration", description=_DESCRIPTIONS["generate-travel-inspiration"])
def generate_travel_inspiration(
    content_type: str,
    theme: str,
    target_destination: str | None = None,
    target_audience: str | None = None,
    tone: str | None = None,
    word_count: int | None = None,
) -> dict:
    return _call(
        "generate-travel-inspiration",
        content_type=content_type,
        theme=theme,
        target_destination=target_destination,
        target_audience=target_audience,
        tone=tone,
        word_count=word_count,
    )


@mcp.tool(name="get-seasonal-insights", description=_DESCRIPTIONS["get-seasonal-insights"])
def get_seasonal_insights(
    destination: str,
    month: str | None = None,
    include_events: bool | None = None,
    include_weather: bool | None = None,
) -> dict:
    return _call(
        "get-seasonal-insights",
        destination=destination,
        month=month,
        include_events=include_events,
        include_weather=include_weather,
    )


@mcp.tool(name="analyze-content-performance", description=_DESCRIPTIONS["analyze-content-performance"])
def analyze_content_performance(
    analysis_period: dict | None = None,
    content_type: str | None = None,
) -> dict:
    return _call(
        "analyze-content-performance",
        analysis_period=analysis_period,
        content_type=content_type,
    )


@mcp.tool(name="get-local-insights", description=_DESCRIPTIONS["get-local-insights"])
def get_local_insights(destination: str, insight_categories: list[str] | None = None) -> dict:
    return _call("get-local-insights", destination=destination, insight_categories=insight_categories)


@mcp.tool(name="compare-destinations", description=_DESCRIPTIONS["compare-destinations"])
def compare_destinations(destinations: list[str], comparison_criteria: list[str] | None = None) -> dict:
    return _call("compare-destinations", destinations=destinations, comparison_criteria=comparison_criteria)


def main() -> None:
    """stdio 전송으로 MCP 서버를 실행합니다."""
    configure_logging()
    logger.info("Destination Intelligence MCP server starting (stdio)")
    mcp.run()


if __name__ == "__main__":
    main()
