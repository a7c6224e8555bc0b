"""타임아웃 정책 유틸 테스트."""

from app.core.config import Settings
from app.core.timeout_policy import build_timeout_policy


def test_build_timeout_policy_caps_by_request_timeout() -> None:
    settings = Settings(
        SERVICE_SECRET="test-service-secret",
        REQUEST_TIMEOUT_SECONDS=20,
        LLM_TIMEOUT_SECONDS=60,
        EXTERNAL_API_TIMEOUT_SECONDS=50,
    )

    policy = build_timeout_policy(settings)

    assert policy.request_timeout_seconds == 20
    assert policy.llm_timeout_seconds == 20
    assert policy.external_api_timeout_seconds == 20
    assert policy.probe_timeout_seconds == 5


def test_build_timeout_policy_enforces_minimum() -> None:
    settings = Settings(REQUEST_TIMEOUT_SECONDS=0, LLM_TIMEOUT_SECONDS=-5, EXTERNAL_API_TIMEOUT_SECONDS=3)

    policy = build_timeout_policy(settings)

    assert policy.request_timeout_seconds == 1
    assert policy.llm_timeout_seconds == 1
    assert policy.external_api_timeout_seconds == 1
    assert policy.probe_timeout_seconds == 1


def test_describe_lists_every_timeout() -> None:
    policy = build_timeout_policy(Settings(REQUEST_TIMEOUT_SECONDS=60, LLM_TIMEOUT_SECONDS=30, EXTERNAL_API_TIMEOUT_SECONDS=15))

    assert policy.describe() == "request=60s llm=30s external=15s probe=5s"
