"""
Failure classification helpers mapping backend exceptions to diagnostic labels.

Adapters always surface backend failures as ``ErrorCode.AGENT_FAILED``; the
label computed here is attached to the error context (``failure_class``) so
callers that own a retry policy can tell an auth problem from a rate limit
without inspecting SDK exception types.
"""
from __future__ import annotations

import asyncio
from enum import Enum
from typing import Dict, Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class FailureClass(str, Enum):
    """Coarse categories of backend failures."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    TRANSIENT = "transient"
    UNKNOWN = "unknown"


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from a backend exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code`` (openai SDK)
    - ``exc.code`` / ``exc.status`` (google-genai ``APIError``)
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, FailureClass] = {
    400: FailureClass.VALIDATION,
    401: FailureClass.AUTH,
    403: FailureClass.AUTH,
    404: FailureClass.NOT_FOUND,
    408: FailureClass.TIMEOUT,
    409: FailureClass.CONFLICT,
    422: FailureClass.VALIDATION,
    429: FailureClass.RATE_LIMIT,
    500: FailureClass.SERVER_ERROR,
    502: FailureClass.TRANSIENT,
    503: FailureClass.UNAVAILABLE,
    504: FailureClass.TIMEOUT,
}


def _heuristic_from_message(msg: str) -> Optional[FailureClass]:
    """Substring heuristic for exceptions that carry no HTTP status."""
    if "rate" in msg and "limit" in msg:
        return FailureClass.RATE_LIMIT
    pattern_groups = (
        (FailureClass.TIMEOUT, ("timeout", "timed out")),
        (FailureClass.AUTH, ("unauthorized", "forbidden", "api key")),
        (FailureClass.NOT_FOUND, ("not found", "does not exist")),
        (FailureClass.UNAVAILABLE, ("unavailable", "connection refused")),
    )
    for failure, patterns in pattern_groups:
        if any(p in msg for p in patterns):
            return failure
    return None


def classify_exception(exc: BaseException) -> FailureClass:
    """Classify an exception into a :class:`FailureClass`.

    Precedence:
        1. Timeout exceptions (sync/async).
        2. HTTP status mapping.
        3. Substring heuristics.
        4. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return FailureClass.TIMEOUT
    status = _extract_status(exc)
    if status is not None:
        if status in _HTTP_STATUS_MAP:
            return _HTTP_STATUS_MAP[status]
        if status >= 500:
            return FailureClass.SERVER_ERROR
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else FailureClass.UNKNOWN


def wrap_agent_failure(
    exc: BaseException,
    message: str,
    *,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> ProviderError:
    """Wrap a backend exception as ``AGENT_FAILED`` tagged with its failure class."""
    return ProviderError.wrap(
        exc, ErrorCode.AGENT_FAILED, message, provider=provider, model=model
    ).with_context("failure_class", classify_exception(exc).value)


__all__ = [
    "FailureClass",
    "classify_exception",
    "wrap_agent_failure",
]
