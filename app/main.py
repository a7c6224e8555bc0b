"""FastAPI 애플리케이션 진입점.

HTTP 전송 계층입니다. 도구 실행은 MCP 서버와 같은 `ToolDispatcher`를 공유합니다.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.openapi.docs import get_redoc_html, get_swagger_ui_html
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.api import tools
from app.api.dependencies import SERVICE_SECRET_HEADER, require_service_secret
from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.logging_config import configure_logging
from app.core.readiness import collect_readiness_status
from app.core.timeout_policy import get_timeout_policy
from app.services.tool_dispatch import get_tool_dispatcher

configure_logging()
logger = get_logger(__name__)
settings = get_settings()
timeout_policy = get_timeout_policy(settings)

_DOCS_MODES = frozenset({"disabled", "secret", "public"})
_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
    "Cache-Control": "no-store",
}


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _resolve_docs_mode(mode: str) -> str:
    normalized = (mode or "").strip().lower()
    if normalized in _DOCS_MODES:
        return normalized
    logger.warning("유효하지 않은 DOCS_MODE 값입니다. disabled로 대체합니다: %s", mode)
    return "disabled"


def _configure_network_middleware(app_: FastAPI) -> None:
    """프록시 헤더, 허용 호스트, CORS 미들웨어를 설정값에 따라 등록합니다."""
    if settings.PROXY_HEADERS_ENABLED:
        proxy_hosts = _split_csv(settings.PROXY_TRUSTED_HOSTS) or ["127.0.0.1"]
        app_.add_middleware(ProxyHeadersMiddleware, trusted_hosts=proxy_hosts)

    allowed_hosts = _split_csv(settings.TRUSTED_HOSTS)
    if allowed_hosts:
        app_.add_middleware(TrustedHostMiddleware, allowed_hosts=allowed_hosts)

    origins = _split_csv(settings.CORS_ALLOW_ORIGINS)
    if not origins:
        return

    allow_credentials = settings.CORS_ALLOW_CREDENTIALS
    if "*" in origins and allow_credentials:
        logger.warning(
            "CORS_ALLOW_ORIGINS에 '*'와 CORS_ALLOW_CREDENTIALS=true가 함께 설정되어 "
            "allow_credentials를 false로 강제합니다."
        )
        allow_credentials = False

    app_.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=_split_csv(settings.CORS_ALLOW_METHODS) or ["GET", "POST"],
        allow_headers=_split_csv(settings.CORS_ALLOW_HEADERS) or ["Content-Type", SERVICE_SECRET_HEADER],
    )


@asynccontextmanager
async def lifespan(app_: FastAPI):
    """기동 시 도구 디스패처(DB 스키마, 보강기 포함)를 미리 구성합니다."""
    dispatcher = get_tool_dispatcher()
    logger.info(
        "%s 기동: tools=%d timeouts(%s)",
        app_.title,
        len(dispatcher.tool_names),
        timeout_policy.describe(),
    )
    yield


docs_mode = _resolve_docs_mode(settings.DOCS_MODE)

app = FastAPI(
    title="Destination Intelligence",
    lifespan=lifespan,
    docs_url="/docs" if docs_mode == "public" else None,
    redoc_url="/redoc" if docs_mode == "public" else None,
    openapi_url="/openapi.json" if docs_mode == "public" else None,
)

_configure_network_middleware(app)
app.include_router(tools.router)


@app.middleware("http")
async def enforce_request_timeout(request: Request, call_next) -> Response:
    """요청 전체 처리 시간을 제한합니다."""
    try:
        return await asyncio.wait_for(call_next(request), timeout=timeout_policy.request_timeout_seconds)
    except asyncio.TimeoutError:
        logger.warning(
            "Request timed out after %ss: %s %s",
            timeout_policy.request_timeout_seconds,
            request.method,
            request.url.path,
        )
        return JSONResponse(status_code=504, content={"detail": "요청 처리 시간이 초과되었습니다."})


@app.middleware("http")
async def add_security_headers(request: Request, call_next) -> Response:
    """기본 보안 헤더를 응답에 추가합니다."""
    response = await call_next(request)
    if not settings.SECURITY_HEADERS_ENABLED:
        return response

    for name, value in _SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    if settings.ENABLE_HSTS and request.url.scheme == "https":
        response.headers.setdefault("Strict-Transport-Security", f"max-age={settings.HSTS_MAX_AGE_SECONDS}")
    return response


@app.exception_handler(SQLAlchemyError)
async def storage_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """핵심 조회 경로의 저장소 오류는 503으로 응답합니다."""
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "저장소를 일시적으로 사용할 수 없습니다."})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """예상하지 못한 예외를 표준 형식으로 처리합니다."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    message = str(exc) if settings.EXPOSE_INTERNAL_ERRORS else "내부 서버 오류가 발생했습니다."
    return JSONResponse(status_code=500, content={"detail": message})


if docs_mode == "secret":

    @app.get("/openapi.json", include_in_schema=False, dependencies=[Depends(require_service_secret)])
    def openapi_json() -> JSONResponse:
        """서비스 시크릿 인증 후 OpenAPI 스키마를 반환합니다."""
        return JSONResponse(app.openapi())

    @app.get("/docs", include_in_schema=False, dependencies=[Depends(require_service_secret)])
    def swagger_ui() -> Response:
        """서비스 시크릿 인증 후 Swagger UI를 반환합니다."""
        return get_swagger_ui_html(openapi_url="/openapi.json", title=f"{app.title} - Swagger UI")

    @app.get("/redoc", include_in_schema=False, dependencies=[Depends(require_service_secret)])
    def redoc_ui() -> Response:
        """서비스 시크릿 인증 후 ReDoc UI를 반환합니다."""
        return get_redoc_html(openapi_url="/openapi.json", title=f"{app.title} - ReDoc")


@app.get("/")
def health_check() -> dict:
    """헬스 체크 엔드포인트."""
    return {"status": "ok", "message": "Destination Intelligence Server is running"}


@app.get("/health/ready")
async def readiness_check() -> JSONResponse:
    """DB, 여행지 카탈로그, 보강 공급자 준비 상태를 반환합니다."""
    result = await collect_readiness_status()
    status_code = 200 if result["status"] == "ready" else 503
    return JSONResponse(status_code=status_code, content=result)
