"""애플리케이션 전역 설정을 관리하는 모듈."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """환경 변수 기반 설정 모델."""

    DATABASE_URL: str = "sqlite:///./destination_intelligence.db"
    OPENAI_API_KEY: str | None = None
    LLM_MODEL_NAME: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.7
    ENRICHMENT_ENABLED: bool = True
    MAX_CONTENT_LENGTH: int = 2000
    ENABLE_CONTENT_CACHING: bool = True
    MIN_RECOMMENDATION_SCORE: int = 0
    SERVICE_SECRET: str = ""
    REQUEST_TIMEOUT_SECONDS: int = 60
    LLM_TIMEOUT_SECONDS: int = 30
    EXTERNAL_API_TIMEOUT_SECONDS: int = 15
    LOG_LEVEL: str = "INFO"
    APP_ENV: str = "development"
    DOCS_MODE: str = "disabled"
    EXPOSE_INTERNAL_ERRORS: bool = False
    CORS_ALLOW_ORIGINS: str = ""
    CORS_ALLOW_METHODS: str = "GET,POST,OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type,x-service-secret"
    CORS_ALLOW_CREDENTIALS: bool = False
    SECURITY_HEADERS_ENABLED: bool = True
    ENABLE_HSTS: bool = False
    HSTS_MAX_AGE_SECONDS: int = 31536000
    PROXY_HEADERS_ENABLED: bool = True
    PROXY_TRUSTED_HOSTS: str = "127.0.0.1"
    TRUSTED_HOSTS: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("LLM_TEMPERATURE", mode="before")
    @classmethod
    def _clamp_llm_temperature(cls, value: object) -> float:
        try:
            numeric = float(value) if value is not None else 0.7
        except (TypeError, ValueError):
            numeric = 0.7
        return min(2.0, max(0.0, numeric))

    @field_validator("MIN_RECOMMENDATION_SCORE", mode="before")
    @classmethod
    def _clamp_min_recommendation_score(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 0
        except (TypeError, ValueError):
            numeric = 0
        return min(100, max(0, numeric))

    @field_validator("MAX_CONTENT_LENGTH", mode="before")
    @classmethod
    def _clamp_max_content_length(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 2000
        except (TypeError, ValueError):
            numeric = 2000
        return max(100, numeric)

    @property
    def enrichment_configured(self) -> bool:
        """생성형 보강을 사용할 수 있는 설정인지 여부."""
        return self.ENRICHMENT_ENABLED and bool((self.OPENAI_API_KEY or "").strip())


@lru_cache
def get_settings() -> Settings:
    """Settings 인스턴스를 반환한다. 최초 호출 시에만 생성되고 이후 캐싱된다."""
    return Settings()
