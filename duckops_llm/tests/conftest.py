"""Pytest configuration for the duckops_llm test suite.

All tests are offline: SDK clients are replaced with fakes from
``duckops_llm.tests.fakes`` or routed through ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
import logging
from typing import Iterator, List

import pytest

from duckops_llm.base.logging import get_logger


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[dict] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            return
        payload["_level"] = record.levelname
        self.events.append(payload)


@pytest.fixture()
def captured_events(monkeypatch: pytest.MonkeyPatch) -> Iterator[List[dict]]:
    """Collect structured events emitted under the ``duckops_llm`` logger."""
    monkeypatch.delenv("DUCKOPS_LLM_LOG_LEVEL", raising=False)
    logger = get_logger()
    handler = _ListHandler()
    logger.addHandler(handler)
    try:
        yield handler.events
    finally:
        logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def _hermetic_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer machines' configuration out of the tests."""
    for name in (
        "DUCKOPS_LLM_CONFIG_FILE",
        "DUCKOPS_LLM_DEFAULT",
        "DUCKOPS_LLM_PROVIDERS",
        "OPENAI_API_KEY",
        "OPENAI_BASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)
