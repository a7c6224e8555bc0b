"""Uvicorn 기본 포맷에 맞춘 로깅 설정."""

from __future__ import annotations

import copy
import logging.config
from typing import Any

from uvicorn.config import LOGGING_CONFIG as UVICORN_LOGGING_CONFIG

from app.core.config import get_settings


def _resolve_log_level(level: str | None = None) -> str:
    """인자 또는 설정에서 로그 레벨을 결정합니다."""
    if level:
        return level.upper()
    return (get_settings().LOG_LEVEL or "INFO").upper()


def build_logging_config(level: str | None = None, *, stream: str = "ext://sys.stderr") -> dict[str, Any]:
    """Uvicorn 기본 포맷터를 유지하면서 출력 스트림과 레벨을 지정한 설정을 생성합니다.

    MCP stdio 서버에서 호출될 때 stdout이 오염되지 않도록 기본 핸들러는 stderr를 사용합니다.
    """
    log_level = _resolve_log_level(level)
    config = copy.deepcopy(UVICORN_LOGGING_CONFIG)

    config["handlers"]["default"]["stream"] = stream
    config["root"] = {"handlers": ["default"], "level": log_level}

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        config["loggers"][logger_name]["level"] = log_level

    return config


def configure_logging(level: str | None = None) -> None:
    """dictConfig로 로깅을 구성합니다."""
    logging.config.dictConfig(build_logging_config(level))
