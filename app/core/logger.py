"""표준화된 로거 모듈.

프로젝트 전체에서 일관된 로깅 형식을 제공합니다.
MCP stdio 전송은 stdout을 프로토콜 채널로 사용하므로 로그는 stderr로만 출력합니다.
"""

import logging
import sys

from app.core.config import get_settings

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        level = get_settings().LOG_LEVEL
    resolved = logging.getLevelName((level or "INFO").upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str, level: str | int | None = None) -> logging.Logger:
    """표준화된 로거를 반환합니다.

    Args:
        name: 로거 이름 (일반적으로 __name__ 사용).
        level: 로그 레벨. 생략하면 `LOG_LEVEL` 설정을 따릅니다.

    Returns:
        stderr 핸들러가 연결된 로거 인스턴스.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        log_level = _resolve_level(level)
        logger.setLevel(log_level)

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
        # 루트 핸들러(configure_logging)로는 전파하지 않는다.
        logger.propagate = False

    return logger
