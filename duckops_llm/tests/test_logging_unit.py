"""Tests for the structured logging helpers."""
from __future__ import annotations

import json
import logging

import pytest

from duckops_llm.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from duckops_llm.base.log_support import JsonFormatter


def test_child_loggers_are_prefixed_and_propagate():
    logger = get_logger("adapters.test")
    assert logger.name == "duckops_llm.adapters.test"
    assert logger.propagate is True
    assert get_logger("duckops_llm.registry").name == "duckops_llm.registry"
    assert get_logger().propagate is False


def test_log_event_merges_context_and_drops_none(captured_events):
    ctx = LogContext(provider="openai", model="gpt-4o", extra={"request_id": "r1", "skip": None})
    log_event(get_logger("t"), "generate.start", ctx, messages=2, note=None)
    (event,) = captured_events
    assert event == {
        "event": "generate.start",
        "provider": "openai",
        "model": "gpt-4o",
        "request_id": "r1",
        "messages": 2,
        "_level": "INFO",
    }


def test_normalized_event_keeps_stable_keys(captured_events):
    logger = get_logger("t")
    normalized_log_event(logger, "stream.end", LogContext(provider="gemini"), phase="finalize", emitted=True, phase_extra=None)
    normalized_log_event(logger, "stream.error", phase="mid_stream", error_code="agent_failed", emitted=False, attempt=1)
    ok, failed = captured_events
    assert set(REQUIRED_NORMALIZED_KEYS) - {"error_code"} <= set(ok)
    assert "error_code" not in ok
    assert ok["_level"] == "INFO"
    assert failed["error_code"] == "agent_failed"
    assert failed["_level"] == "ERROR"


def test_level_comes_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DUCKOPS_LLM_LOG_LEVEL", "debug")
    try:
        assert get_logger().level == logging.DEBUG
        monkeypatch.setenv("DUCKOPS_LLM_LOG_LEVEL", "nonsense")
        assert get_logger().level == logging.INFO
    finally:
        monkeypatch.delenv("DUCKOPS_LLM_LOG_LEVEL")
        configure_logger(level="INFO")


def test_json_formatter_hoists_payload_keys():
    record = logging.LogRecord("duckops_llm.t", logging.WARNING, __file__, 1, json.dumps({"event": "e", "n": 1}), None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "e" and out["n"] == 1
    assert out["level"] == "WARNING" and out["logger"] == "duckops_llm.t"
    assert "msg" not in out

    plain = json.loads(JsonFormatter().format(logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)))
    assert plain["msg"] == "hello"
