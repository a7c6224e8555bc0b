"""여행 도메인 저장소.

모든 조회/쓰기는 독립적인 짧은 세션에서 수행되며, 결과는 세션을 벗어나기 전에
`app.schemas.records`의 레코드로 검증/변환됩니다.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import extract, func
from sqlalchemy.orm import Session, sessionmaker

from app.models.content import InspirationContent
from app.models.destination import (
    Destination,
    DestinationGuide,
    ItineraryTemplate,
    PointOfInterest,
    SeasonalEvent,
)
from app.models.traveler import RecommendationLog, RecommendationLogItem, TravelerPreference
from app.schemas.records import (
    ContentPerformanceRow,
    DaySchedule,
    DestinationRecord,
    GuideRecord,
    InspirationRecord,
    ItineraryTemplateRecord,
    PointOfInterestRecord,
    PreferenceRecord,
    SeasonalEventRecord,
)


class DestinationActivityRow(BaseModel):
    """기간 내 여행지별 추천 노출/예약 집계."""

    destination: str
    surfaced: int = 0
    bookings: int = 0
    revenue: float = 0.0


class TravelRepository:
    """여행 도메인 엔티티에 대한 조회/쓰기 창구."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    # --- destinations ---------------------------------------------------------------

    def find_destination(self, name: str) -> DestinationRecord | None:
        """도시명(대소문자 무관)으로 활성 여행지를 조회합니다."""
        with self._session_factory() as session:
            row = (
                session.query(Destination)
                .filter(func.lower(Destination.city) == name.strip().lower())
                .filter(Destination.is_active.is_(True))
                .order_by(Destination.country)
                .first()
            )
            return DestinationRecord.model_validate(row) if row else None

    def find_destinations(self, names: Iterable[str]) -> list[DestinationRecord]:
        """여러 도시명을 한 번에 조회합니다. 반환 순서는 보장하지 않습니다."""
        lowered = sorted({name.strip().lower() for name in names})
        if not lowered:
            return []
        with self._session_factory() as session:
            rows = (
                session.query(Destination)
                .filter(func.lower(Destination.city).in_(lowered))
                .filter(Destination.is_active.is_(True))
                .all()
            )
            return [DestinationRecord.model_validate(row) for row in rows]

    def list_active_destinations(
        self,
        *,
        min_daily_cost: float | None = None,
        max_daily_cost: float | None = None,
    ) -> list[DestinationRecord]:
        """추천 후보가 될 활동 중인 여행지를 도시명 순으로 반환합니다."""
        with self._session_factory() as session:
            query = session.query(Destination).filter(Destination.is_active.is_(True))
            if min_daily_cost is not None:
                query = query.filter(Destination.average_daily_cost_usd >= min_daily_cost)
            if max_daily_cost is not None:
                query = query.filter(Destination.average_daily_cost_usd <= max_daily_cost)
            rows = query.order_by(Destination.city, Destination.id).all()
            return [DestinationRecord.model_validate(row) for row in rows]

    # --- points of interest ---------------------------------------------------------

    def list_points_of_interest(
        self,
        destination_id: uuid.UUID,
        *,
        poi_types: Iterable[str] | None = None,
        price_levels: Iterable[str] | None = None,
        must_see_first: bool = True,
        limit: int | None = None,
    ) -> list[PointOfInterestRecord]:
        """POI 목록. 기본 정렬은 must-see 우선, 평점 내림차순입니다."""
        with self._session_factory() as session:
            query = session.query(PointOfInterest).filter(PointOfInterest.destination_id == destination_id)
            if poi_types is not None:
                query = query.filter(PointOfInterest.poi_type.in_(list(poi_types)))
            if price_levels is not None:
                query = query.filter(PointOfInterest.price_level.in_(list(price_levels)))

            ordering = [PointOfInterest.rating.desc().nulls_last(), PointOfInterest.review_count.desc()]
            if must_see_first:
                ordering.insert(0, PointOfInterest.is_must_see.desc())
            query = query.order_by(*ordering, PointOfInterest.name)

            if limit is not None:
                query = query.limit(limit)
            return [PointOfInterestRecord.model_validate(row) for row in query.all()]

    # --- guides ---------------------------------------------------------------------

    def list_published_guides(
        self,
        destination_id: uuid.UUID,
        guide_types: Iterable[str] | None = None,
    ) -> list[GuideRecord]:
        with self._session_factory() as session:
            query = (
                session.query(DestinationGuide)
                .filter(DestinationGuide.destination_id == destination_id)
                .filter(DestinationGuide.is_published.is_(True))
            )
            if guide_types is not None:
                query = query.filter(DestinationGuide.guide_type.in_(list(guide_types)))
            rows = query.order_by(DestinationGuide.last_updated.desc(), DestinationGuide.title).all()
            return [GuideRecord.model_validate(row) for row in rows]

    def increment_guide_views(self, guide_ids: Iterable[uuid.UUID]) -> None:
        ids = list(guide_ids)
        if not ids:
            return
        with self._session_factory() as session, session.begin():
            session.query(DestinationGuide).filter(DestinationGuide.id.in_(ids)).update(
                {DestinationGuide.view_count: DestinationGuide.view_count + 1},
                synchronize_session=False,
            )

    def save_guide(
        self,
        destination_id: uuid.UUID,
        *,
        guide_type: str,
        title: str,
        content: str,
        highlights: list[str],
        author: str,
    ) -> uuid.UUID:
        guide = DestinationGuide(
            destination_id=destination_id,
            guide_type=guide_type,
            title=title,
            content=content,
            highlights=highlights,
            tips=[],
            insider_recommendations=[],
            estimated_read_time_minutes=max(1, len(content.split()) // 200),
            author=author,
        )
        with self._session_factory() as session, session.begin():
            session.add(guide)
            session.flush()
            return guide.id

    # --- itinerary templates --------------------------------------------------------

    def find_itinerary_template(
        self,
        destination_id: uuid.UUID,
        duration_days: int,
        audience: str | None = None,
    ) -> ItineraryTemplateRecord | None:
        """구조 키(여행지 + 일수 + 대상)에 맞는 재사용 가능한 일정 템플릿을 찾습니다."""
        with self._session_factory() as session:
            query = (
                session.query(ItineraryTemplate)
                .filter(ItineraryTemplate.destination_id == destination_id)
                .filter(ItineraryTemplate.duration_days == duration_days)
            )
            if audience:
                query = query.filter(func.upper(ItineraryTemplate.target_audience) == audience.upper())
            row = query.order_by(
                ItineraryTemplate.is_featured.desc(),
                ItineraryTemplate.usage_count.desc(),
                ItineraryTemplate.average_rating.desc().nulls_last(),
                ItineraryTemplate.created_at,
                ItineraryTemplate.id,
            ).first()
            return ItineraryTemplateRecord.model_validate(row) if row else None

    def increment_template_usage(self, template_id: uuid.UUID) -> None:
        with self._session_factory() as session, session.begin():
            session.query(ItineraryTemplate).filter(ItineraryTemplate.id == template_id).update(
                {ItineraryTemplate.usage_count: ItineraryTemplate.usage_count + 1},
                synchronize_session=False,
            )

    def save_itinerary_template(
        self,
        destination_id: uuid.UUID,
        *,
        template_name: str,
        duration_days: int,
        trip_style: str,
        target_audience: str,
        daily_schedule: list[DaySchedule],
        estimated_cost_usd: float | None,
        packing_list: list[str],
        budget_breakdown: dict[str, float],
    ) -> uuid.UUID:
        template = ItineraryTemplate(
            destination_id=destination_id,
            template_name=template_name,
            duration_days=duration_days,
            trip_style=trip_style,
            target_audience=target_audience,
            daily_schedule=[day.model_dump(mode="json") for day in daily_schedule],
            estimated_cost_usd=estimated_cost_usd,
            packing_list=packing_list,
            budget_breakdown=budget_breakdown,
            usage_count=1,
            is_featured=False,
        )
        with self._session_factory() as session, session.begin():
            session.add(template)
            session.flush()
            return template.id

    # --- seasonal events ------------------------------------------------------------

    def list_seasonal_events(
        self,
        destination_id: uuid.UUID,
        month_number: int,
        limit: int = 5,
    ) -> list[SeasonalEventRecord]:
        """시작일이 해당 월(연도 무관)인 행사를 관련도 내림차순으로 반환합니다."""
        with self._session_factory() as session:
            rows = (
                session.query(SeasonalEvent)
                .filter(SeasonalEvent.destination_id == destination_id)
                .filter(extract("month", SeasonalEvent.start_date) == month_number)
                .order_by(SeasonalEvent.relevance_score.desc(), SeasonalEvent.start_date, SeasonalEvent.event_name)
                .limit(limit)
                .all()
            )
            return [SeasonalEventRecord.model_validate(row) for row in rows]

    # --- traveler preferences & recommendation log ----------------------------------

    def get_preference(self, passenger_id: str) -> PreferenceRecord | None:
        with self._session_factory() as session:
            row = session.query(TravelerPreference).filter(TravelerPreference.passenger_id == passenger_id).first()
            return PreferenceRecord.model_validate(row) if row else None

    def count_recommendation_appearances(self) -> dict[str, int]:
        """여행지별로 과거 추천 로그에 노출된 횟수를 반환합니다."""
        with self._session_factory() as session:
            rows = (
                session.query(
                    RecommendationLogItem.destination,
                    func.count(func.distinct(RecommendationLogItem.log_id)),
                )
                .group_by(RecommendationLogItem.destination)
                .all()
            )
            return {destination: int(count) for destination, count in rows}

    def log_recommendations(
        self,
        *,
        passenger_id: str | None,
        session_id: str,
        context: dict,
        shown: list[tuple[str, int]],
    ) -> uuid.UUID:
        """추천 노출 기록을 추가합니다. `shown`은 (여행지, 점수) 목록이며 순서가 순위입니다."""
        log = RecommendationLog(passenger_id=passenger_id, session_id=session_id, context=context)
        log.items = [
            RecommendationLogItem(destination=destination, score=score, rank=rank)
            for rank, (destination, score) in enumerate(shown, start=1)
        ]
        with self._session_factory() as session, session.begin():
            session.add(log)
            session.flush()
            return log.id

    # --- inspiration content --------------------------------------------------------

    def find_inspiration(
        self,
        *,
        content_type: str,
        theme: str,
        destination_id: uuid.UUID | None,
    ) -> InspirationRecord | None:
        with self._session_factory() as session:
            query = (
                session.query(InspirationContent)
                .filter(InspirationContent.content_type == content_type)
                .filter(InspirationContent.theme == theme)
                .filter(InspirationContent.is_published.is_(True))
            )
            if destination_id is None:
                query = query.filter(InspirationContent.destination_id.is_(None))
            else:
                query = query.filter(InspirationContent.destination_id == destination_id)
            row = query.order_by(
                InspirationContent.view_count.desc(),
                InspirationContent.created_at.desc(),
                InspirationContent.id,
            ).first()
            return InspirationRecord.model_validate(row) if row else None

    def increment_inspiration_views(self, content_id: uuid.UUID) -> None:
        with self._session_factory() as session, session.begin():
            session.query(InspirationContent).filter(InspirationContent.id == content_id).update(
                {InspirationContent.view_count: InspirationContent.view_count + 1},
                synchronize_session=False,
            )

    def save_inspiration(
        self,
        *,
        content_type: str,
        theme: str,
        tone: str,
        destination_id: uuid.UUID | None,
        title: str,
        subtitle: str,
        content: str,
        call_to_action: str,
        images: list[str],
        seo_metadata: dict,
        target_audience: list[str],
        published_at: datetime,
    ) -> uuid.UUID:
        record = InspirationContent(
            content_type=content_type,
            theme=theme,
            tone=tone,
            destination_id=destination_id,
            title=title,
            subtitle=subtitle,
            content=content,
            call_to_action=call_to_action,
            images=images,
            seo_metadata=seo_metadata,
            target_audience=target_audience,
            ai_generated=True,
            published_at=published_at,
        )
        with self._session_factory() as session, session.begin():
            session.add(record)
            session.flush()
            return record.id

    # --- analytics ------------------------------------------------------------------

    def list_content_performance(
        self,
        start: datetime,
        end: datetime,
        content_type: str | None = None,
    ) -> list[ContentPerformanceRow]:
        with self._session_factory() as session:
            query = session.query(InspirationContent).filter(InspirationContent.created_at.between(start, end))
            if content_type:
                query = query.filter(InspirationContent.content_type == content_type)
            rows = query.order_by(InspirationContent.created_at, InspirationContent.id).all()
            return [ContentPerformanceRow.model_validate(row) for row in rows]

    def summarize_destination_activity(self, start: datetime, end: datetime) -> list[DestinationActivityRow]:
        """기간 내 여행지별 추천 노출 수, 예약 수, 매출을 집계합니다."""
        with self._session_factory() as session:
            surfaced_rows = (
                session.query(
                    RecommendationLogItem.destination,
                    func.count(func.distinct(RecommendationLogItem.log_id)),
                )
                .join(RecommendationLog, RecommendationLog.id == RecommendationLogItem.log_id)
                .filter(RecommendationLog.created_at.between(start, end))
                .group_by(RecommendationLogItem.destination)
                .all()
            )
            booking_rows = (
                session.query(
                    RecommendationLog.booked_destination,
                    func.count(RecommendationLog.id),
                    func.coalesce(func.sum(RecommendationLog.conversion_value_usd), 0),
                )
                .filter(RecommendationLog.booked_destination.isnot(None))
                .filter(RecommendationLog.created_at.between(start, end))
                .group_by(RecommendationLog.booked_destination)
                .all()
            )

        summary: dict[str, DestinationActivityRow] = {}
        for destination, count in surfaced_rows:
            summary[destination] = DestinationActivityRow(destination=destination, surfaced=int(count))
        for destination, bookings, revenue in booking_rows:
            row = summary.setdefault(destination, DestinationActivityRow(destination=destination))
            row.bookings = int(bookings)
            row.revenue = float(revenue or 0)
        return list(summary.values())
