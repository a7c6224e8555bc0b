"""도구 핸들러가 공유하는 실행 컨텍스트."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from app.core.config import Settings, get_settings
from app.database import build_engine, build_session_factory
from app.models import Base
from app.repositories.travel_repository import TravelRepository
from app.services.enrichment import Enricher, build_enricher
from app.services.side_channel import BestEffortWriter


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class ToolContext:
    """저장소, 보강기, 부가 쓰기 채널, 시계를 묶은 불변 컨텍스트.

    프로세스 내 공유 가변 상태는 없으며 모든 상태는 저장소에 있습니다.
    """

    repository: TravelRepository
    enricher: Enricher
    settings: Settings
    writer: BestEffortWriter = field(default_factory=BestEffortWriter)
    clock: Callable[[], datetime] = _utcnow

    def now(self) -> datetime:
        return self.clock()

    def today(self) -> date:
        return self.clock().date()


def build_tool_context(settings: Settings | None = None) -> ToolContext:
    """설정으로부터 운영용 컨텍스트를 구성하고 스키마를 준비합니다."""
    resolved_settings = settings or get_settings()
    engine = build_engine(resolved_settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    return ToolContext(
        repository=TravelRepository(build_session_factory(engine)),
        enricher=build_enricher(resolved_settings),
        settings=resolved_settings,
    )
