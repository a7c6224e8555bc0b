"""API 의존성 모음."""

import secrets

from fastapi import Header, HTTPException, Request, status

from app.core.config import get_settings
from app.core.logger import get_logger

SERVICE_SECRET_HEADER = "x-service-secret"

logger = get_logger(__name__)


def require_service_secret(
    request: Request,
    x_service_secret: str | None = Header(default=None, alias=SERVICE_SECRET_HEADER),
) -> None:
    """도구 API와 문서 경로에 대한 서비스 간 시크릿 헤더를 검증한다.

    헤더 값은 상수 시간 비교로 확인하며, 시크릿이 설정되지 않은 서버는 모든 호출을 거부한다.
    """
    expected = get_settings().SERVICE_SECRET
    if not expected:
        logger.error("SERVICE_SECRET 미설정 상태에서 보호된 경로 호출: %s", request.url.path)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="서비스 시크릿 설정이 없습니다.",
        )

    if x_service_secret is None or not secrets.compare_digest(x_service_secret.encode(), expected.encode()):
        logger.info("서비스 시크릿 불일치로 거부: %s %s", request.method, request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="유효하지 않은 서비스 시크릿입니다.",
        )
