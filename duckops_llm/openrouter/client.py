"""OpenRouter provider adapter (OpenAI protocol over a tuned HTTP client).

Summary:
- Requests go through the ``openai`` SDK pointed at the OpenRouter base URL.
- Every request carries the attribution and caching headers OpenRouter
  expects, injected by ``HeaderTransport`` underneath the SDK.
- The HTTP client keeps a large idle pool (100 connections, 90 s expiry)
  and a 60 s client timeout.

Errors & Observability are inherited from ``BaseOpenAIStyleProvider``.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..base.http import PoolConfig
from ..base.openai_style_parts.base import BaseOpenAIStyleProvider
from ..base.openai_style_parts.client_protocol import _ChatCompletionsClient
from ..base.openai_style_parts.provider_init import _ProviderInit
from ..config.defaults import (
    OPENROUTER_CLIENT_TIMEOUT_SECONDS,
    OPENROUTER_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_MAX_TOKENS,
    OPENROUTER_DEFAULT_MODEL,
    OPENROUTER_HEADERS,
    OPENROUTER_IDLE_TIMEOUT_SECONDS,
    OPENROUTER_MAX_IDLE_CONNECTIONS,
    OPENROUTER_MAX_IDLE_PER_HOST,
)

__all__ = ["OpenRouterProvider", "OPENROUTER_POOL"]


OPENROUTER_POOL = PoolConfig(
    max_idle_connections=OPENROUTER_MAX_IDLE_CONNECTIONS,
    max_idle_per_host=OPENROUTER_MAX_IDLE_PER_HOST,
    idle_timeout_seconds=OPENROUTER_IDLE_TIMEOUT_SECONDS,
)


class OpenRouterProvider(BaseOpenAIStyleProvider):
    """OpenRouter LLM provider implementation."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        *,
        client: Optional[_ChatCompletionsClient] = None,
        base_transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        init = _ProviderInit(
            provider_name="openrouter",
            api_key=api_key,
            base_url=OPENROUTER_DEFAULT_BASE_URL,
            default_model=model or OPENROUTER_DEFAULT_MODEL,
            default_max_tokens=OPENROUTER_DEFAULT_MAX_TOKENS,
            logger_name="duckops_llm.openrouter",
            headers=OPENROUTER_HEADERS,
            pool=OPENROUTER_POOL,
            timeout_seconds=OPENROUTER_CLIENT_TIMEOUT_SECONDS,
        )
        super().__init__(init, client=client, base_transport=base_transport)
