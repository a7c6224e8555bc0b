"""부가 쓰기(best-effort side channel).

캐시/로그/템플릿 저장과 사용량 카운터 갱신은 실패해도 본 응답에 영향을 주지 않아야 합니다.
이 채널을 거치는 쓰기는 호출 지점에서 비핵심(non-critical)임이 드러납니다.
"""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError

from app.core.logger import get_logger

logger = get_logger(__name__)


class BestEffortWriter:
    """실패를 로그로만 남기고 삼키는 쓰기 실행기."""

    def submit(self, label: str, write: Callable[[], object]) -> bool:
        """쓰기를 실행합니다. 성공하면 True, 저장소 오류가 나면 경고 로그 후 False."""
        try:
            write()
        except SQLAlchemyError as exc:
            logger.warning("Best-effort write 실패 [%s]: %s", label, exc)
            return False
        return True
