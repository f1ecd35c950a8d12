"""Structured (JSON) output enforcement shared by every adapter.

Purpose
-------
Models asked for JSON frequently wrap it in a Markdown code fence. This module
strips one surrounding fence and parses the remainder, either as plain JSON
or validated into a typed target.

External dependencies
---------------------
- Pydantic v2 (``BaseModel.model_validate_json`` / ``TypeAdapter``) for typed
  targets.

Failure modes
-------------
- Failures of the underlying ``generate`` propagate unchanged.
- Unparseable or invalid JSON raises ``ProviderError(INVALID_INPUT)`` with the
  stripped text under ``context["raw_response"]`` and the parse error as cause.
"""
from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Optional, Sequence

from pydantic import BaseModel, TypeAdapter, ValidationError

from .cancellation import CancellationToken
from .errors import ErrorCode, ProviderError
from .models import GenerateOptions, Message

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .interfaces import LLMProvider

_JSON_FENCE = "```json"
_FENCE = "```"


def strip_code_fence(text: str) -> str:
    """Trim whitespace and remove one surrounding Markdown code fence.

    A leading ```` ```json ```` takes precedence over a bare ```` ``` ````;
    the trailing fence is removed when present. Text without a leading fence
    is only trimmed.
    """
    text = text.strip()
    if text.startswith(_JSON_FENCE):
        text = text[len(_JSON_FENCE):]
    elif text.startswith(_FENCE):
        text = text[len(_FENCE):]
    else:
        return text
    if text.endswith(_FENCE):
        text = text[: -len(_FENCE)]
    return text.strip()


def parse_json(text: str, target: Any = None) -> Any:
    """Parse ``text`` into ``target``.

    ``None`` returns plain decoded JSON; a pydantic model class is validated
    with ``model_validate_json``; any other type goes through ``TypeAdapter``.
    """
    if target is None:
        return json.loads(text)
    if isinstance(target, type) and issubclass(target, BaseModel):
        return target.model_validate_json(text)
    return TypeAdapter(target).validate_json(text)


def generate_json(
    provider: "LLMProvider",
    messages: Sequence[Message],
    options: Optional[GenerateOptions] = None,
    target: Any = None,
    *,
    token: Optional[CancellationToken] = None,
) -> Any:
    """Generate with ``provider`` and decode the reply as JSON."""
    reply = provider.generate(messages, options, token=token)
    cleaned = strip_code_fence(reply)
    try:
        return parse_json(cleaned, target)
    except (ValueError, ValidationError) as exc:
        raise ProviderError.wrap(
            exc,
            ErrorCode.INVALID_INPUT,
            "invalid llm json response",
            provider=getattr(provider, "provider_name", None),
        ).with_context("raw_response", cleaned) from exc


class JSONOutputMixin:
    """Adds ``generate_json`` to any class implementing ``generate``."""

    def generate_json(
        self,
        messages: Sequence[Message],
        options: Optional[GenerateOptions] = None,
        target: Any = None,
        *,
        token: Optional[CancellationToken] = None,
    ) -> Any:
        return generate_json(self, messages, options, target, token=token)  # type: ignore[arg-type]


__all__ = ["strip_code_fence", "parse_json", "generate_json", "JSONOutputMixin"]
