"""LM Studio provider adapter (local OpenAI-compatible server).

The local server needs no credentials, so an empty API key is replaced with
a fixed placeholder the SDK accepts. Not every LM Studio build implements
model retrieval, so the health check lists models instead.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..base.openai_style_parts.base import BaseOpenAIStyleProvider
from ..base.openai_style_parts.client_protocol import _ChatCompletionsClient
from ..base.openai_style_parts.provider_init import _ProviderInit
from ..config.defaults import (
    LMSTUDIO_DEFAULT_BASE_URL,
    LMSTUDIO_DEFAULT_MAX_TOKENS,
    LMSTUDIO_DEFAULT_MODEL,
    LMSTUDIO_PLACEHOLDER_API_KEY,
)

__all__ = ["LMStudioProvider"]


class LMStudioProvider(BaseOpenAIStyleProvider):
    """Adapter for a locally running LM Studio server."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        *,
        client: Optional[_ChatCompletionsClient] = None,
        base_transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        init = _ProviderInit(
            provider_name="lmstudio",
            api_key=api_key or LMSTUDIO_PLACEHOLDER_API_KEY,
            base_url=base_url or LMSTUDIO_DEFAULT_BASE_URL,
            default_model=model or LMSTUDIO_DEFAULT_MODEL,
            default_max_tokens=LMSTUDIO_DEFAULT_MAX_TOKENS,
            logger_name="duckops_llm.lmstudio",
            list_models_for_health=True,
        )
        super().__init__(init, client=client, base_transport=base_transport)
