# app/models/content.py
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, JsonType


# 영감 콘텐츠 (아티클, 이메일, SNS 포스트 등)와 성과 카운터
class InspirationContent(Base):
    __tablename__ = "inspiration_content"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # ARTICLE, EMAIL, SOCIAL_POST, ITINERARY_PREVIEW
    content_type: Mapped[str] = mapped_column(String(30), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    subtitle: Mapped[str | None] = mapped_column(Text, nullable=True)
    destination_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("destinations.id", ondelete="SET NULL"), index=True, nullable=True
    )
    theme: Mapped[str] = mapped_column(String(30), index=True, nullable=False)
    tone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    call_to_action: Mapped[str | None] = mapped_column(Text, nullable=True)
    images: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)
    seo_metadata: Mapped[dict] = mapped_column(JsonType, default=dict, nullable=False)
    target_audience: Mapped[list] = mapped_column(JsonType, default=list, nullable=False)

    view_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    click_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    conversion_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    is_published: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    ai_generated: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)

    @property
    def conversion_rate(self) -> float:
        """조회 대비 전환 비율(%)."""
        if not self.view_count:
            return 0.0
        return round(self.conversion_count / self.view_count * 100, 2)
