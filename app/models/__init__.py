"""ORM 모델 모음. 메타데이터 생성 전에 모든 테이블이 등록되도록 한 곳에서 import한다."""

from app.models.base import Base
from app.models.content import InspirationContent
from app.models.destination import (
    Destination,
    DestinationGuide,
    ItineraryTemplate,
    PointOfInterest,
    SeasonalEvent,
)
from app.models.traveler import RecommendationLog, RecommendationLogItem, TravelerPreference

__all__ = [
    "Base",
    "Destination",
    "DestinationGuide",
    "InspirationContent",
    "ItineraryTemplate",
    "PointOfInterest",
    "RecommendationLog",
    "RecommendationLogItem",
    "SeasonalEvent",
    "TravelerPreference",
]
