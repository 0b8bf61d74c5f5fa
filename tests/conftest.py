"""Pytest configuration and fixtures for testing."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, Generator

import httpx
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from groq_proxy.config_loader import ProxySettings

TEST_KEY_ENV = "GROQ_PROXY_TEST_API_KEY"
TEST_BASE_URL = "http://groq.test/openai/v1"


# =============================================================================
# Payload Builders
# =============================================================================


def build_anthropic_request(
    messages: list[dict[str, Any]] | None = None,
    *,
    model: str = "claude-3-5-sonnet",
    **extra: Any,
) -> dict[str, Any]:
    """Build an Anthropic Messages request body."""
    payload: dict[str, Any] = {
        "model": model,
        "messages": messages if messages is not None else [{"role": "user", "content": "Hello"}],
    }
    payload.update(extra)
    return payload


def build_tool_call(
    name: str,
    arguments: dict[str, Any] | str,
    *,
    call_id: str = "call_1",
) -> dict[str, Any]:
    """Build an OpenAI tool call; dict arguments are JSON-encoded."""
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return {
        "id": call_id,
        "type": "function",
        "function": {"name": name, "arguments": arguments},
    }


def build_openai_completion(
    content: str | None = "Hello from Groq",
    *,
    tool_calls: list[dict[str, Any]] | None = None,
    finish_reason: str = "stop",
    prompt_tokens: int = 12,
    completion_tokens: int = 5,
) -> dict[str, Any]:
    """Build a non-streaming OpenAI chat completion response body."""
    message: dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    return {
        "id": "chatcmpl-upstream123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "moonshotai/kimi-k2-instruct",
        "choices": [{"index": 0, "message": message, "finish_reason": finish_reason}],
        "usage": {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": prompt_tokens + completion_tokens,
        },
    }


# =============================================================================
# Fake Upstream
# =============================================================================


class FakeGroq:
    """Records requests and replays queued responses through httpx.MockTransport."""

    def __init__(self) -> None:
        self.received: list[dict[str, Any]] = []
        self._responses: list[httpx.Response | Callable[[httpx.Request], httpx.Response]] = []

    def enqueue_json(self, body: Any, status_code: int = 200) -> None:
        self._responses.append(httpx.Response(status_code, json=body))

    def enqueue(self, response: httpx.Response | Callable[[httpx.Request], httpx.Response]) -> None:
        self._responses.append(response)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.received.append({
            "method": request.method,
            "url": str(request.url),
            "headers": dict(request.headers),
            "json": json.loads(request.content) if request.content else None,
        })
        if not self._responses:
            raise AssertionError("FakeGroq received an unexpected request")
        response = self._responses.pop(0)
        if callable(response):
            return response(request)
        return response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fake_groq() -> FakeGroq:
    return FakeGroq()


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> ProxySettings:
    """Settings whose API key comes from .env values, not the real environment."""
    monkeypatch.delenv(TEST_KEY_ENV, raising=False)
    return ProxySettings(
        base_url=TEST_BASE_URL,
        api_key_env=TEST_KEY_ENV,
        request_timeout=5.0,
        env_values={TEST_KEY_ENV: "test-key"},
    )


@pytest.fixture
def client(settings: ProxySettings, fake_groq: FakeGroq) -> Generator[Any, None, None]:
    """TestClient for an app wired to the fake upstream."""
    from fastapi.testclient import TestClient

    from groq_proxy.main import create_app

    app = create_app(settings, transport=fake_groq.transport)
    with TestClient(app) as test_client:
        yield test_client
