"""콘텐츠 성과 분석 도구 (analyze-content-performance)."""

from __future__ import annotations

from datetime import timedelta

from app.core.logger import get_logger
from app.repositories.travel_repository import DestinationActivityRow
from app.schemas.analytics import (
    AnalysisPeriod,
    ContentInsight,
    ContentPerformanceRequest,
    ContentPerformanceResponse,
    DestinationPerformance,
    PerformanceSummary,
)
from app.services.context import ToolContext

logger = get_logger(__name__)

DEFAULT_PERIOD_DAYS = 30
AVERAGE_TIME_ON_PAGE_SECONDS = 180
TOP_DESTINATION_LIMIT = 10
LOW_CONVERSION_RATE = 5.0
HIGH_CONVERSION_RATE = 8.0


def _destination_performance(row: DestinationActivityRow) -> DestinationPerformance:
    rate = round(row.bookings / row.surfaced * 100, 2) if row.surfaced else 0.0
    return DestinationPerformance(
        destination=row.destination,
        views=row.surfaced,
        bookings=row.bookings,
        conversion_rate=rate,
        revenue_generated=round(row.revenue, 2),
    )


def _insights(conversion_rate: float, top: list[DestinationPerformance]) -> list[ContentInsight]:
    insights: list[ContentInsight] = []
    if conversion_rate < LOW_CONVERSION_RATE:
        insights.append(
            ContentInsight(
                insight="Conversion rates below industry average (5-8%)",
                recommendation="Enhance content with more personalization and compelling CTAs",
            )
        )
    elif conversion_rate > HIGH_CONVERSION_RATE:
        insights.append(
            ContentInsight(
                insight="Excellent conversion rates above 8%",
                recommendation="Scale winning content strategies to other destinations",
            )
        )

    if top and top[0].bookings > 0:
        leader = top[0].destination
        insights.append(
            ContentInsight(
                insight=f"{leader} is the top converting destination",
                recommendation=f"Create more content highlighting {leader}",
            )
        )
    return insights


def analyze_content_performance(
    context: ToolContext,
    request: ContentPerformanceRequest,
) -> ContentPerformanceResponse:
    """기간 내 영감 콘텐츠 성과와 여행지별 예약 전환을 집계합니다."""
    repository = context.repository
    period = request.analysis_period
    if period is None:
        end = context.now()
        period = AnalysisPeriod(start_date=end - timedelta(days=DEFAULT_PERIOD_DAYS), end_date=end)

    rows = repository.list_content_performance(period.start_date, period.end_date, request.content_type)
    conversion_rate = round(sum(row.conversion_rate for row in rows) / len(rows), 2) if rows else 0.0

    activity = repository.summarize_destination_activity(period.start_date, period.end_date)
    ranked = sorted(activity, key=lambda row: (-row.bookings, -row.revenue, -row.surfaced, row.destination))
    top = [_destination_performance(row) for row in ranked[:TOP_DESTINATION_LIMIT]]

    logger.info("콘텐츠 성과 분석: contents=%d destinations=%d", len(rows), len(activity))
    return ContentPerformanceResponse(
        analysis_period=period,
        summary=PerformanceSummary(
            total_content_views=sum(row.view_count for row in rows),
            total_interactions=sum(row.click_count for row in rows),
            total_conversions=sum(row.conversion_count for row in rows),
            average_time_on_page=AVERAGE_TIME_ON_PAGE_SECONDS,
            conversion_rate=conversion_rate,
        ),
        top_performing_destinations=top,
        content_insights=_insights(conversion_rate, top),
    )
