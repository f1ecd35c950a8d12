"""OpenAI-style provider parts (base class, init bundle, request helpers)."""

from .provider_init import _ProviderInit
from .client_protocol import _ChatCompletionsClient
from .base import BaseOpenAIStyleProvider
from .style_helpers import (
    build_chat_params,
    build_stream_params,
    extract_delta_text,
    extract_openai_text,
    to_openai_messages,
)

__all__ = [
    "_ProviderInit",
    "_ChatCompletionsClient",
    "BaseOpenAIStyleProvider",
    "build_chat_params",
    "build_stream_params",
    "extract_delta_text",
    "extract_openai_text",
    "to_openai_messages",
]
