"""애플리케이션 준비성(readiness) 체크 유틸.

필수 점검은 DB 연결 하나이며, 여행지 카탈로그와 OpenAI 보강은 상태만 보고합니다.
보강이 없어도 모든 도구는 결정적 폴백으로 응답할 수 있습니다.
"""

from __future__ import annotations

import asyncio
import socket
from pathlib import Path
from urllib.parse import unquote, urlparse

from sqlalchemy import func, inspect, select, text
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import Settings, get_settings
from app.core.timeout_policy import TimeoutPolicy, get_timeout_policy
from app.database import build_engine
from app.models.destination import Destination

ReadinessCheck = dict[str, str | bool]

_DEFAULT_DB_PORTS = {
    "postgres": 5432,
    "postgresql": 5432,
    "mysql": 3306,
    "mariadb": 3306,
}


def _ok(detail: str, *, required: bool = True) -> ReadinessCheck:
    return {"status": "ok", "ok": True, "required": required, "detail": detail}


def _fail(detail: str, *, required: bool = True) -> ReadinessCheck:
    return {"status": "fail", "ok": False, "required": required, "detail": detail}


def _skip(detail: str, *, required: bool = False) -> ReadinessCheck:
    return {"status": "skip", "ok": True, "required": required, "detail": detail}


def _resolve_db_host_port(database_url: str) -> tuple[str, int] | None:
    parsed = urlparse(database_url)
    if not parsed.hostname:
        return None
    base_scheme = parsed.scheme.split("+")[0].lower()
    return parsed.hostname, int(parsed.port or _DEFAULT_DB_PORTS.get(base_scheme, 5432))


def _is_sqlite(database_url: str) -> bool:
    return urlparse(database_url).scheme.split("+")[0].lower() in {"sqlite", "sqlite3"}


def _sqlite_parent_dir(database_url: str) -> Path | None:
    """파일 기반 SQLite DB의 상위 디렉터리. 인메모리 DB면 None."""
    if database_url.endswith(":memory:"):
        return None
    db_path = unquote(urlparse(database_url).path or "")
    # sqlite:///relative.db 는 "/relative.db", sqlite:////abs.db 는 "//abs.db" 로 파싱된다.
    db_path = db_path[1:] if db_path.startswith("/") else db_path
    return Path(db_path).parent if db_path else None


async def _check_tcp_connectivity(host: str, port: int, timeout_seconds: int, label: str) -> ReadinessCheck:
    def _connect() -> None:
        with socket.create_connection((host, port), timeout=timeout_seconds):
            return None

    try:
        await asyncio.to_thread(_connect)
        return _ok(f"{label} 연결 가능 ({host}:{port})")
    except OSError as exc:
        return _fail(f"{label} 연결 실패 ({host}:{port}): {exc}")


def _ping_sqlite(database_url: str) -> None:
    parent = _sqlite_parent_dir(database_url)
    if parent is not None and not parent.exists():
        raise FileNotFoundError(f"DB 경로 디렉터리가 존재하지 않습니다: {parent}")

    engine = build_engine(database_url)
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    finally:
        engine.dispose()


async def _check_database_readiness(settings: Settings, timeout_policy: TimeoutPolicy) -> ReadinessCheck:
    database_url = (settings.DATABASE_URL or "").strip()
    if not database_url:
        return _fail("DATABASE_URL이 설정되지 않았습니다.")

    if _is_sqlite(database_url):
        try:
            await asyncio.to_thread(_ping_sqlite, database_url)
            return _ok("SQLite 연결 확인 완료")
        except (OSError, SQLAlchemyError) as exc:
            return _fail(f"SQLite 연결 실패: {exc}")

    host_port = _resolve_db_host_port(database_url)
    if host_port is None:
        return _fail("DATABASE_URL에서 DB 호스트를 파싱할 수 없습니다.")

    host, port = host_port
    return await _check_tcp_connectivity(
        host=host,
        port=port,
        timeout_seconds=timeout_policy.probe_timeout_seconds,
        label="DB",
    )


def _count_active_destinations(database_url: str) -> int | None:
    """활성 여행지 수. 테이블이 아직 없으면 None."""
    engine = build_engine(database_url)
    try:
        with engine.connect() as connection:
            if not inspect(connection).has_table(Destination.__tablename__):
                return None
            query = select(func.count()).select_from(Destination).where(Destination.is_active.is_(True))
            return int(connection.execute(query).scalar_one())
    finally:
        engine.dispose()


async def _check_catalog_readiness(settings: Settings, db_check: ReadinessCheck) -> ReadinessCheck:
    # 빈 카탈로그에서도 서버는 동작하며 여행지 조회가 NotFound를 반환할 뿐이다.
    if not db_check["ok"]:
        return _skip("DB 점검 실패로 카탈로그 점검을 건너뜁니다.")

    try:
        count = await asyncio.to_thread(_count_active_destinations, settings.DATABASE_URL.strip())
    except SQLAlchemyError as exc:
        return _fail(f"여행지 카탈로그 조회 실패: {exc}", required=False)

    if count is None:
        return _skip("여행지 테이블이 아직 생성되지 않았습니다.")
    return _ok(f"활성 여행지 {count}곳", required=False)


async def _check_openai_readiness(settings: Settings, timeout_policy: TimeoutPolicy) -> ReadinessCheck:
    if not settings.enrichment_configured:
        return _skip("OpenAI 보강이 설정되지 않아 결정적 폴백만 사용합니다.")

    check = await _check_tcp_connectivity(
        host="api.openai.com",
        port=443,
        timeout_seconds=timeout_policy.probe_timeout_seconds,
        label="OpenAI API",
    )
    return {**check, "required": False}


async def collect_readiness_status() -> dict[str, object]:
    """DB, 여행지 카탈로그, 보강 공급자의 준비 상태를 점검합니다."""
    settings = get_settings()
    timeout_policy = get_timeout_policy(settings)

    db_check, openai_check = await asyncio.gather(
        _check_database_readiness(settings, timeout_policy),
        _check_openai_readiness(settings, timeout_policy),
    )
    catalog_check = await _check_catalog_readiness(settings, db_check)

    checks: dict[str, ReadinessCheck] = {
        "db": db_check,
        "catalog": catalog_check,
        "openai": openai_check,
    }
    required_checks_ok = all(bool(check["ok"]) for check in checks.values() if bool(check.get("required", True)))

    return {
        "status": "ready" if required_checks_ok else "not_ready",
        "checks": checks,
    }
