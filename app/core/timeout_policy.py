"""전역 타임아웃 정책 정의.

요청 전체 시간 안에 생성형 보강과 외부 점검이 끝나도록 하위 타임아웃은 요청 타임아웃으로 상한을 둡니다.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.core.config import Settings, get_settings

_MIN_TIMEOUT_SECONDS = 1
_MAX_PROBE_TIMEOUT_SECONDS = 5


def _normalize_timeout(value: int | float | None, default: int, *, upper_bound: int | None = None) -> int:
    """타임아웃 값을 정수 초 단위로 정규화합니다."""
    try:
        seconds = int(value) if value is not None else int(default)
    except (TypeError, ValueError):
        seconds = int(default)

    seconds = max(_MIN_TIMEOUT_SECONDS, seconds)
    if upper_bound is not None:
        seconds = min(seconds, upper_bound)
    return seconds


@dataclass(frozen=True, slots=True)
class TimeoutPolicy:
    """애플리케이션 전체 타임아웃 정책.

    - `request_timeout_seconds`: HTTP 요청 하나의 전체 처리 시간
    - `llm_timeout_seconds`: 생성형 보강 호출 1회. 초과 시 결정적 폴백으로 넘어갑니다.
    - `external_api_timeout_seconds`: DB 등 외부 호스트 연결
    - `probe_timeout_seconds`: readiness 점검용 연결. 외부 타임아웃보다 짧게 유지합니다.
    """

    request_timeout_seconds: int
    llm_timeout_seconds: int
    external_api_timeout_seconds: int
    probe_timeout_seconds: int

    def describe(self) -> str:
        return (
            f"request={self.request_timeout_seconds}s llm={self.llm_timeout_seconds}s "
            f"external={self.external_api_timeout_seconds}s probe={self.probe_timeout_seconds}s"
        )


def build_timeout_policy(settings: Settings) -> TimeoutPolicy:
    """설정값으로부터 일관된 타임아웃 정책을 생성합니다."""
    request_timeout = _normalize_timeout(settings.REQUEST_TIMEOUT_SECONDS, default=60)
    llm_timeout = _normalize_timeout(settings.LLM_TIMEOUT_SECONDS, default=30, upper_bound=request_timeout)
    external_timeout = _normalize_timeout(
        settings.EXTERNAL_API_TIMEOUT_SECONDS,
        default=15,
        upper_bound=request_timeout,
    )
    probe_timeout = min(external_timeout, _MAX_PROBE_TIMEOUT_SECONDS)

    return TimeoutPolicy(
        request_timeout_seconds=request_timeout,
        llm_timeout_seconds=llm_timeout,
        external_api_timeout_seconds=external_timeout,
        probe_timeout_seconds=probe_timeout,
    )


def get_timeout_policy(settings: Settings | None = None) -> TimeoutPolicy:
    """현재 설정을 기반으로 타임아웃 정책을 반환합니다."""
    resolved_settings = settings or get_settings()
    return build_timeout_policy(resolved_settings)
