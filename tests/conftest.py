"""공용 테스트 픽스처."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.core.config import get_settings
from app.database import build_engine, build_session_factory
from app.models import Base
from app.repositories.travel_repository import TravelRepository
from app.seed import seed_sample_data
from app.services.context import ToolContext
from app.services.enrichment import UnconfiguredEnricher

FIXED_NOW = datetime(2025, 9, 15, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("SERVICE_SECRET", "test-service-secret")
    monkeypatch.setenv("DOCS_MODE", "disabled")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def session_factory():
    engine = build_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    factory = build_session_factory(engine)
    seed_sample_data(factory)
    yield factory
    engine.dispose()


@pytest.fixture
def repository(session_factory) -> TravelRepository:
    return TravelRepository(session_factory)


@pytest.fixture
def tool_context(repository, settings) -> ToolContext:
    return ToolContext(
        repository=repository,
        enricher=UnconfiguredEnricher(reason="test"),
        settings=settings,
        clock=lambda: FIXED_NOW,
    )
