"""
Helper utilities for OpenAI-style Chat Completions providers.

Purpose:
- Translate ``Message`` sequences and resolved options into SDK parameters.
- Extract text from non-streaming responses and stream chunks.

No network I/O happens here.
"""

from __future__ import annotations

import typing as _t

from ..models import Message


def to_openai_messages(messages: _t.Sequence[Message]) -> list[dict[str, str]]:
    """Map messages one-to-one, passing roles through verbatim."""
    out: list[dict[str, str]] = []
    for m in messages:
        item = {"role": m.role, "content": m.content}
        if m.name:
            item["name"] = m.name
        out.append(item)
    return out


def build_chat_params(
    model: str,
    messages: _t.Sequence[Message],
    *,
    max_tokens: _t.Optional[int] = None,
    temperature: _t.Optional[float] = None,
    top_p: _t.Optional[float] = None,
) -> dict[str, _t.Any]:
    """Build keyword arguments for ``chat.completions.create``.

    Unset (``None``) values are omitted so the backend applies its defaults.
    """
    params: dict[str, _t.Any] = {"model": model, "messages": to_openai_messages(messages)}
    if max_tokens is not None:
        params["max_tokens"] = max_tokens
    if temperature is not None:
        params["temperature"] = temperature
    if top_p is not None:
        params["top_p"] = top_p
    return params


def build_stream_params(
    model: str,
    messages: _t.Sequence[Message],
    *,
    max_tokens: _t.Optional[int] = None,
    temperature: _t.Optional[float] = None,
    top_p: _t.Optional[float] = None,
) -> dict[str, _t.Any]:
    """Same as ``build_chat_params`` with ``stream=True``."""
    params = build_chat_params(model, messages, max_tokens=max_tokens, temperature=temperature, top_p=top_p)
    params["stream"] = True
    return params


def has_choices(resp: _t.Any) -> bool:
    return bool(getattr(resp, "choices", None))


def extract_openai_text(resp: _t.Any) -> str:
    """Return ``choices[0].message.content`` (``""`` when content is null)."""
    return resp.choices[0].message.content or ""


def extract_delta_text(chunk: _t.Any) -> _t.Optional[str]:
    """Return the first choice's delta text of a stream chunk, if any."""
    choices = getattr(chunk, "choices", None)
    if not choices:
        return None
    delta = getattr(choices[0], "delta", None)
    return getattr(delta, "content", None) if delta is not None else None


__all__ = [
    "to_openai_messages",
    "build_chat_params",
    "build_stream_params",
    "has_choices",
    "extract_openai_text",
    "extract_delta_text",
]
