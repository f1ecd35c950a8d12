"""Tests for the header-injecting transport and client construction."""
from __future__ import annotations

import json

import httpx

from duckops_llm.base.http import HeaderTransport, PoolConfig, build_http_client
from duckops_llm.openrouter import OPENROUTER_POOL


def _recording_transport(seen: list) -> httpx.MockTransport:
    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    return httpx.MockTransport(_handler)


def test_headers_are_set_on_every_request_and_replace_existing_values():
    seen: list = []
    transport = HeaderTransport({"X-Title": "DuckOps Agent"}, base=_recording_transport(seen))
    with httpx.Client(transport=transport) as client:
        client.get("https://llm.test/a")
        client.get("https://llm.test/b", headers={"X-Title": "caller value"})

    assert [r.headers["X-Title"] for r in seen] == ["DuckOps Agent", "DuckOps Agent"]
    assert [r.url.path for r in seen] == ["/a", "/b"]


def test_request_body_passes_through_untouched():
    seen: list = []
    client = build_http_client({"anthropic-beta": "prompt-caching-2024-07-31"}, base_transport=_recording_transport(seen))
    with client:
        resp = client.post("https://llm.test/v1/chat/completions", json={"model": "m"})
    assert resp.json() == {"ok": True}
    assert seen[0].headers["anthropic-beta"] == "prompt-caching-2024-07-31"
    assert json.loads(seen[0].content) == {"model": "m"}


def test_build_http_client_applies_timeout():
    client = build_http_client({}, timeout=60.0, base_transport=_recording_transport([]))
    with client:
        assert client.timeout.read == 60.0
        assert client.timeout.connect == 60.0


def test_pool_config_maps_to_httpx_limits():
    limits = PoolConfig(max_idle_connections=100, max_idle_per_host=10, idle_timeout_seconds=90.0).to_limits()
    assert limits.max_keepalive_connections == 10
    assert limits.keepalive_expiry == 90.0
    assert OPENROUTER_POOL == PoolConfig(100, 100, 90.0)
