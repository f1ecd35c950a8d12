"""OpenAI provider adapter built on BaseOpenAIStyleProvider.

Talks to the official OpenAI endpoint through the ``openai`` SDK. All
request/stream/health orchestration is inherited; this module only pins the
OpenAI defaults (model ``gpt-4o``, 5000 max tokens).
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..base.openai_style_parts.base import BaseOpenAIStyleProvider
from ..base.openai_style_parts.client_protocol import _ChatCompletionsClient
from ..base.openai_style_parts.provider_init import _ProviderInit
from ..config.defaults import OPENAI_DEFAULT_MAX_TOKENS, OPENAI_DEFAULT_MODEL

__all__ = ["OpenAIProvider"]


class OpenAIProvider(BaseOpenAIStyleProvider):
    """OpenAI adapter using the shared OpenAI-style base provider."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        *,
        client: Optional[_ChatCompletionsClient] = None,
        base_transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        init = _ProviderInit(
            provider_name="openai",
            api_key=api_key,
            base_url=None,
            default_model=model or OPENAI_DEFAULT_MODEL,
            default_max_tokens=OPENAI_DEFAULT_MAX_TOKENS,
            logger_name="duckops_llm.openai",
        )
        super().__init__(init, client=client, base_transport=base_transport)
