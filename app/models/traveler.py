# app/models/traveler.py
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, JsonType


# 여행자 선호 프로필. 외부 선호 관리 시스템이 갱신하며 여기서는 점수 계산 입력으로만 읽는다.
class TravelerPreference(Base):
    __tablename__ = "traveler_preferences"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    passenger_id: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)

    travel_style: Mapped[str | None] = mapped_column(String(30), nullable=True)
    preferred_activities: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    avoided_activities: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    dietary_restrictions: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    preferred_destinations: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    bucket_list_destinations: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    typical_trip_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    travel_companions: Mapped[str | None] = mapped_column(String(30), nullable=True)
    budget_preference: Mapped[str | None] = mapped_column(String(20), nullable=True)
    interests: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    pace_preference: Mapped[str | None] = mapped_column(String(20), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), server_default=func.now()
    )


# 추천 호출 감사 로그 (append-only). 노출된 여행지는 항목 테이블에 한 행씩 기록한다.
class RecommendationLog(Base):
    __tablename__ = "recommendation_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    passenger_id: Mapped[str | None] = mapped_column(String(64), index=True, nullable=True)
    session_id: Mapped[str] = mapped_column(String(100), nullable=False)
    context: Mapped[dict] = mapped_column(JsonType, default=dict, nullable=False)
    booked_destination: Mapped[str | None] = mapped_column(String(100), nullable=True)
    conversion_value_usd: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)

    items: Mapped[list["RecommendationLogItem"]] = relationship(
        back_populates="log", cascade="all, delete-orphan"
    )


class RecommendationLogItem(Base):
    __tablename__ = "recommendation_log_items"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    log_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("recommendation_logs.id", ondelete="CASCADE"), index=True, nullable=False
    )
    destination: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    rank: Mapped[int] = mapped_column(Integer, nullable=False)

    log: Mapped[RecommendationLog] = relationship(back_populates="items")
