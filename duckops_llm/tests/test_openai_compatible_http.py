"""End-to-end adapter tests over the real ``openai`` SDK and ``httpx``.

Requests are routed into ``httpx.MockTransport`` underneath the header
transport, so the SDK's request encoding, the injected headers and the
response parsing are all exercised without network access.
"""
from __future__ import annotations

import json

import httpx
import pytest

from duckops_llm.base.errors import ErrorCode, ProviderError
from duckops_llm.base.models import Message
from duckops_llm.base.streaming import accumulate_chunks
from duckops_llm.compatible import OpenAICompatibleProvider
from duckops_llm.config.defaults import OPENROUTER_HEADERS
from duckops_llm.openrouter import OpenRouterProvider

HELLO = [Message.user("hello")]


def _completion(text: str, model: str = "m") -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 0,
        "model": model,
        "choices": [
            {"index": 0, "finish_reason": "stop", "message": {"role": "assistant", "content": text}}
        ],
    }


def _sse(*deltas: str) -> bytes:
    lines = []
    for text in deltas:
        chunk = {
            "id": "chatcmpl-1",
            "object": "chat.completion.chunk",
            "created": 0,
            "model": "m",
            "choices": [{"index": 0, "delta": {"content": text}, "finish_reason": None}],
        }
        lines.append(f"data: {json.dumps(chunk)}\n\n")
    lines.append("data: [DONE]\n\n")
    return "".join(lines).encode()


class _Backend:
    """Scripted backend recording every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status != 200:
            return httpx.Response(self.status, json={"error": {"message": "denied", "type": "auth"}})
        if request.url.path.endswith("/chat/completions"):
            body = json.loads(request.content)
            if body.get("stream"):
                return httpx.Response(200, headers={"content-type": "text/event-stream"}, content=_sse("Hel", "lo"))
            return httpx.Response(200, json=_completion("pong", body["model"]))
        if "/models/" in request.url.path:
            return httpx.Response(200, json={"id": "m", "object": "model", "created": 0, "owned_by": "test"})
        return httpx.Response(404, json={"error": {"message": "no route"}})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture()
def backend() -> _Backend:
    return _Backend()


def test_openrouter_request_shape_and_headers(backend):
    provider = OpenRouterProvider("sk-or", base_transport=backend.transport)
    assert provider.generate(HELLO) == "pong"

    request = backend.requests[0]
    assert str(request.url) == "https://openrouter.ai/api/v1/chat/completions"
    for name, value in OPENROUTER_HEADERS.items():
        assert request.headers[name] == value
    assert request.headers["X-Title"] == "DuckOps Agent"
    assert request.headers["anthropic-beta"] == "prompt-caching-2024-07-31"
    assert provider.client.timeout == 60.0
    assert request.headers["Authorization"] == "Bearer sk-or"
    body = json.loads(request.content)
    assert body["model"] == "arcee-ai/trinity-large-preview:free"
    assert body["max_tokens"] == 5000
    assert body["messages"] == [{"role": "user", "content": "hello"}]


def test_compatible_adapter_targets_configured_base_url(backend):
    provider = OpenAICompatibleProvider(
        "groq", "gk", "https://api.groq.test/openai/v1", "llama-3.1-8b", base_transport=backend.transport
    )
    assert provider.generate(HELLO) == "pong"

    request = backend.requests[0]
    assert request.url.host == "api.groq.test"
    assert request.url.path == "/openai/v1/chat/completions"
    assert request.headers["anthropic-beta"] == "prompt-caching-2024-07-31"
    body = json.loads(request.content)
    assert (body["max_tokens"], body["temperature"]) == (4096, 0.7)


def test_streaming_over_server_sent_events(backend):
    provider = OpenAICompatibleProvider("groq", "gk", "https://api.groq.test/openai/v1", "m", base_transport=backend.transport)
    assert accumulate_chunks(provider.stream(HELLO)) == "Hello"
    assert json.loads(backend.requests[0].content)["stream"] is True


def test_health_check_hits_model_endpoint_and_maps_auth_failures(backend):
    provider = OpenAICompatibleProvider("groq", "gk", "https://api.groq.test/openai/v1", "m", base_transport=backend.transport)
    provider.health_check()
    assert backend.requests[-1].url.path == "/openai/v1/models/m"

    backend.status = 401
    with pytest.raises(ProviderError) as info:
        provider.health_check()
    assert info.value.code is ErrorCode.AGENT_FAILED
    assert info.value.context["failure_class"] == "auth"
    assert len([r for r in backend.requests if r.url.path.endswith("/models/m")]) == 2


def test_server_errors_are_not_retried(backend):
    backend.status = 500
    provider = OpenRouterProvider("sk-or", base_transport=backend.transport)
    with pytest.raises(ProviderError) as info:
        provider.generate(HELLO)
    assert info.value.context["failure_class"] == "server_error"
    assert len(backend.requests) == 1
