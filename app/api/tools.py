"""도구 호출 HTTP API."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.api.dependencies import require_service_secret
from app.core.logger import get_logger
from app.services.tool_dispatch import ToolDispatcher, get_tool_dispatcher

router = APIRouter(prefix="/api/v1", tags=["tools"], dependencies=[Depends(require_service_secret)])
logger = get_logger(__name__)


TOOL_INVOKE_EXAMPLES = {
    "seasonal_insights": {
        "summary": "계절 정보 조회",
        "value": {"destination": "Barcelona", "month": "September"},
    },
    "compare": {
        "summary": "여행지 비교",
        "value": {"destinations": ["Barcelona", "Tokyo"], "comparison_criteria": ["COST", "WEATHER"]},
    },
}


@router.get("/tools")
def list_tools(dispatcher: ToolDispatcher = Depends(get_tool_dispatcher)) -> dict:
    """등록된 도구 목록과 입력 스키마를 반환한다."""
    return {"tools": dispatcher.catalog()}


@router.post(
    "/tools/{tool_name}",
    responses={
        404: {"description": "알 수 없는 도구 또는 여행지 (오류 envelope)"},
        422: {"description": "입력 검증 실패 (오류 envelope)"},
    },
)
def invoke_tool(
    tool_name: str,
    arguments: dict[str, Any] | None = Body(default=None, openapi_examples=TOOL_INVOKE_EXAMPLES),
    dispatcher: ToolDispatcher = Depends(get_tool_dispatcher),
) -> JSONResponse:
    """도구를 실행하고 결과 또는 오류 envelope을 반환한다."""
    result = dispatcher.dispatch(tool_name, arguments)
    if result.is_error:
        logger.info("Tool %s returned %d", tool_name, result.status_code)
    return JSONResponse(status_code=result.status_code, content=result.payload)
