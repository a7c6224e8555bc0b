# app/models/destination.py
import uuid
from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, JsonType


# 여행지 테이블 (집계 루트). 하드 삭제 대신 is_active로 비활성화한다.
class Destination(Base):
    __tablename__ = "destinations"
    __table_args__ = (
        UniqueConstraint("city", "country", name="uq_destinations_city_country"),
        CheckConstraint("safety_rating >= 0 AND safety_rating <= 5", name="ck_destinations_safety_rating"),
        CheckConstraint(
            "tourist_infrastructure_rating >= 0 AND tourist_infrastructure_rating <= 5",
            name="ck_destinations_infrastructure_rating",
        ),
        CheckConstraint("average_daily_cost_usd >= 0", name="ck_destinations_daily_cost"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    city: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    airport_code: Mapped[str | None] = mapped_column(String(3), nullable=True)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    continent: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # 예: ["CULTURAL", "BEACH", "FAMILY"]
    destination_type: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    # 예: {"months": ["April", "May"], "weather": "Mild and sunny", "events": ["Sant Jordi"]}
    best_time_to_visit: Mapped[dict] = mapped_column(JsonType, default=dict, nullable=False)
    # 예: {"jan": 13, "feb": 14, ...}
    average_temp_celsius: Mapped[dict] = mapped_column(JsonType, default=dict, nullable=False)
    languages_spoken: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    currency: Mapped[str | None] = mapped_column(String(3), nullable=True)
    timezone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    visa_requirements: Mapped[str | None] = mapped_column(Text, nullable=True)

    safety_rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    tourist_infrastructure_rating: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    budget_level: Mapped[str] = mapped_column(String(20), default="MODERATE", nullable=False)
    average_daily_cost_usd: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    popular_activities: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    famous_attractions: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    local_cuisine_highlights: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    cultural_considerations: Mapped[str | None] = mapped_column(Text, nullable=True)

    hero_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    gallery_images: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    short_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    long_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    ai_generated_content: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), server_default=func.now()
    )

    points_of_interest: Mapped[list["PointOfInterest"]] = relationship(
        back_populates="destination", cascade="all, delete-orphan"
    )
    guides: Mapped[list["DestinationGuide"]] = relationship(
        back_populates="destination", cascade="all, delete-orphan"
    )
    itinerary_templates: Mapped[list["ItineraryTemplate"]] = relationship(
        back_populates="destination", cascade="all, delete-orphan"
    )
    seasonal_events: Mapped[list["SeasonalEvent"]] = relationship(
        back_populates="destination", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Destination(city={self.city}, country={self.country})>"


class PointOfInterest(Base):
    __tablename__ = "points_of_interest"
    __table_args__ = (
        CheckConstraint(
            "(latitude IS NULL AND longitude IS NULL) OR "
            "(latitude BETWEEN -90 AND 90 AND longitude BETWEEN -180 AND 180)",
            name="ck_poi_coordinates",
        ),
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_poi_rating"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    destination_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("destinations.id", ondelete="CASCADE"), index=True, nullable=False
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    # ATTRACTION, RESTAURANT, NIGHTLIFE, SHOPPING, ACTIVITY, HOTEL, TRANSPORT
    poi_type: Mapped[str] = mapped_column(String(30), index=True, nullable=False)
    category: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    review_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    # FREE, $, $$, $$$, $$$$
    price_level: Mapped[str | None] = mapped_column(String(4), nullable=True)
    visit_duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    best_time_to_visit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    tags: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    is_must_see: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    images: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    destination: Mapped[Destination] = relationship(back_populates="points_of_interest")


class DestinationGuide(Base):
    __tablename__ = "destination_guides"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    destination_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("destinations.id", ondelete="CASCADE"), index=True, nullable=False
    )

    # OVERVIEW, THINGS_TO_DO, WHERE_TO_EAT, NIGHTLIFE, SHOPPING, DAY_TRIPS, CULTURE, PRACTICAL_INFO
    guide_type: Mapped[str] = mapped_column(String(30), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    highlights: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    tips: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    insider_recommendations: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    estimated_read_time_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    author: Mapped[str] = mapped_column(String(100), default="Editorial Team", nullable=False)
    view_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    helpful_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), server_default=func.now()
    )

    destination: Mapped[Destination] = relationship(back_populates="guides")


class ItineraryTemplate(Base):
    __tablename__ = "itinerary_templates"
    __table_args__ = (
        CheckConstraint("duration_days >= 1 AND duration_days <= 30", name="ck_itinerary_duration"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    destination_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("destinations.id", ondelete="CASCADE"), index=True, nullable=False
    )

    template_name: Mapped[str] = mapped_column(String(200), nullable=False)
    duration_days: Mapped[int] = mapped_column(Integer, nullable=False)
    # RELAXED, BALANCED, PACKED, ADVENTURE, CULTURAL
    trip_style: Mapped[str] = mapped_column(String(20), default="BALANCED", nullable=False)
    # COUPLES, FAMILIES, SOLO, GROUPS, BUSINESS, GENERAL
    target_audience: Mapped[str] = mapped_column(String(20), default="GENERAL", nullable=False)
    # DaySchedule 레코드 목록. 저장소 경계에서 검증된다.
    daily_schedule: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    estimated_cost_usd: Mapped[float | None] = mapped_column(Float, nullable=True)
    difficulty_level: Mapped[str | None] = mapped_column(String(20), nullable=True)
    must_do_activities: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    optional_activities: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    packing_list: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    budget_breakdown: Mapped[dict] = mapped_column(JsonType, default=dict, nullable=False)
    usage_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    average_rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), server_default=func.now()
    )

    destination: Mapped[Destination] = relationship(back_populates="itinerary_templates")


class SeasonalEvent(Base):
    __tablename__ = "seasonal_events"
    __table_args__ = (
        CheckConstraint("relevance_score >= 0 AND relevance_score <= 1", name="ck_event_relevance"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    destination_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("destinations.id", ondelete="CASCADE"), index=True, nullable=False
    )

    event_name: Mapped[str] = mapped_column(String(200), nullable=False)
    event_type: Mapped[str] = mapped_column(String(30), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    expected_crowd_level: Mapped[str | None] = mapped_column(String(20), nullable=True)
    relevance_score: Mapped[float] = mapped_column(Float, default=0.5, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    destination: Mapped[Destination] = relationship(back_populates="seasonal_events")
