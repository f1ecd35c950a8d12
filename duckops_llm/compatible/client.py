"""Generic adapter for any server speaking the OpenAI Chat Completions protocol.

The adapter registers under the configured name (e.g. ``groq``) and points
the ``openai`` SDK at the configured base URL. Non-streaming requests default
to 4096 max tokens at temperature 0.7; the prompt-caching opt-in header is
sent on every request.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ..base.openai_style_parts.base import BaseOpenAIStyleProvider
from ..base.openai_style_parts.client_protocol import _ChatCompletionsClient
from ..base.openai_style_parts.provider_init import _ProviderInit
from ..config.defaults import (
    COMPATIBLE_DEFAULT_MAX_TOKENS,
    COMPATIBLE_DEFAULT_TEMPERATURE,
    PROMPT_CACHING_HEADER,
)

__all__ = ["OpenAICompatibleProvider"]


class OpenAICompatibleProvider(BaseOpenAIStyleProvider):
    """Adapter for an arbitrary OpenAI-compatible endpoint."""

    generate_failed_message = "{name} provider error"
    empty_response_message = "received empty response from {name}"

    def __init__(
        self,
        name: str,
        api_key: str,
        base_url: str,
        model: str,
        *,
        client: Optional[_ChatCompletionsClient] = None,
        base_transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        init = _ProviderInit(
            provider_name=name,
            api_key=api_key,
            base_url=base_url,
            default_model=model,
            default_max_tokens=COMPATIBLE_DEFAULT_MAX_TOKENS,
            default_temperature=COMPATIBLE_DEFAULT_TEMPERATURE,
            logger_name=f"duckops_llm.compatible.{name}",
            headers=dict([PROMPT_CACHING_HEADER]),
        )
        super().__init__(init, client=client, base_transport=base_transport)
