# app/models/base.py
from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase

# PostgreSQL에서는 JSONB, 테스트용 SQLite에서는 일반 JSON으로 저장된다.
JsonType = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """모든 SQLAlchemy 모델의 기반이 되는 선언적 기본 클래스.

    여행지 집계 루트(Destination)와 그 하위 엔티티, 독립 집계(선호 프로필, 추천 로그, 영감 콘텐츠)가
    동일한 메타데이터 레지스트리를 공유합니다.
    """

    pass
