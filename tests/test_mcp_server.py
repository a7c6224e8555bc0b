"""MCP 전송 계층 테스트."""

import json
from dataclasses import replace
from unittest.mock import MagicMock

import pytest
from fastmcp.exceptions import ToolError
from sqlalchemy.exc import OperationalError

import app.mcp_server as mcp_server
from app.services.tool_dispatch import ToolDispatcher


@pytest.fixture
def patched_dispatcher(monkeypatch, tool_context) -> ToolDispatcher:
    dispatcher = ToolDispatcher(tool_context)
    monkeypatch.setattr(mcp_server, "get_tool_dispatcher", lambda: dispatcher)
    return dispatcher


def test_call_drops_unset_arguments(patched_dispatcher) -> None:
    payload = mcp_server._call("get-seasonal-insights", destination="Barcelona", month=None, include_events=None)

    assert payload["seasonal_overview"]["month"] == "September"
    assert payload["events"][0]["event_name"] == "La Mercè Festival"


def test_call_raises_tool_error_with_envelope(patched_dispatcher) -> None:
    with pytest.raises(ToolError) as exc_info:
        mcp_server._call("get-local-insights", destination="Atlantis")

    envelope = json.loads(str(exc_info.value))
    assert envelope["error"] == 'Destination "Atlantis" not found'
    assert envelope["tool"] == "get-local-insights"


def test_storage_failure_becomes_tool_error_envelope(monkeypatch, tool_context) -> None:
    repository = MagicMock()
    repository.find_destination.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
    dispatcher = ToolDispatcher(replace(tool_context, repository=repository))
    monkeypatch.setattr(mcp_server, "get_tool_dispatcher", lambda: dispatcher)

    with pytest.raises(ToolError) as exc_info:
        mcp_server._call("get-local-insights", destination="Tokyo")

    envelope = json.loads(str(exc_info.value))
    assert envelope["error"] == "Storage temporarily unavailable"
    assert set(envelope) == {"error", "tool", "timestamp"}
