"""
Normalized error codes (taxonomy).

Defines the `ErrorCode` enumeration carried by every `ProviderError` raised
from the provider layer. Values are lowercase snake_case and are considered a
stable public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated error kinds representing failure categories."""

    INTERNAL = "internal"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    AGENT_FAILED = "agent_failed"


__all__ = ["ErrorCode"]
