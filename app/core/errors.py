"""도구 호출 오류 분류 및 오류 응답 포맷."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import ValidationError

STORAGE_UNAVAILABLE_MESSAGE = "Storage temporarily unavailable"


class ToolError(Exception):
    """호출자에게 그대로 노출되는 도구 오류의 기반 클래스."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ToolError):
    """요청한 여행지가 없거나 비활성 상태일 때 발생합니다."""

    status_code = 404


class InvalidInputError(ToolError):
    """입력 구조 위반(범위 밖 일수, 비교 대상 개수 등)일 때 발생합니다."""

    status_code = 422


class EnrichmentError(Exception):
    """생성형 보강 호출 실패. 호출자에게 노출되지 않고 결정적 폴백으로 흡수됩니다."""


def invalid_input_from_validation(exc: ValidationError) -> InvalidInputError:
    """pydantic 검증 오류를 `field: message` 요약 형태의 InvalidInputError로 변환합니다."""
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        message = str(error.get("msg", "invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        parts.append(f"{location}: {message}" if location else message)
    return InvalidInputError("; ".join(parts) or "Invalid input")


def build_error_envelope(tool: str, message: str, now: datetime | None = None) -> dict[str, str]:
    """전송 계층이 반환하는 표준 오류 envelope을 생성합니다."""
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    return {"error": message, "tool": tool, "timestamp": timestamp}
