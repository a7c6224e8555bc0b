from functools import lru_cache

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings


def build_engine(database_url: str) -> Engine:
    """`DATABASE_URL`로부터 엔진을 생성한다.

    인메모리 SQLite는 연결마다 별도 DB가 생기므로 단일 커넥션을 공유하도록 `StaticPool`을 사용한다.
    """
    if database_url.startswith("sqlite") and (database_url.endswith(":memory:") or database_url.rstrip("/") == "sqlite:"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(database_url, pool_pre_ping=True)


@lru_cache
def get_engine() -> Engine:
    """`SQLAlchemy` 엔진을 반환한다. 최초 호출 시에만 생성되고 이후 캐싱된다."""
    return build_engine(get_settings().DATABASE_URL)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """짧게 쓰고 닫는 세션을 위한 팩토리를 생성한다.

    저장소 계층은 조회 결과를 세션 밖에서 레코드로 변환해 사용하므로 커밋 후 만료를 끈다.
    """
    return sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)


def get_session_local() -> sessionmaker[Session]:
    """`SessionLocal` 팩토리를 반환한다."""
    return build_session_factory(get_engine())

