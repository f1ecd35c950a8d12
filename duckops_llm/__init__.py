"""duckops_llm package

Uniform interface over several LLM backends (OpenAI, OpenRouter, Gemini,
LM Studio and any OpenAI-compatible server).

Public API (re-exported):
    - Version: ``__version__``
    - Contract & DTOs: :class:`LLMProvider`, :class:`Message`,
      :class:`GenerateOptions`, :class:`ChatChunk`, :class:`Config`,
      :class:`ProviderConfig`
    - Errors: :class:`ProviderError`, :class:`ErrorCode`,
      :class:`UnresolvedProviderExit`, :class:`CancelledError`
    - Registry & config: :class:`LLMRegistry`, :func:`load_config`
    - Adapters (imported on first access so unused SDKs stay unloaded):
      ``OpenAIProvider``, ``OpenRouterProvider``, ``LMStudioProvider``,
      ``OpenAICompatibleProvider``, ``GeminiProvider``

Typical wiring::

    registry = LLMRegistry.from_config(load_config())
    registry.register(GeminiProvider.connect(api_key, token=token))
    text = registry.must_get("openai").generate([Message.user("hi")])
"""

from importlib import import_module
from typing import Any

from .base import (
    CancellationToken,
    CancelledError,
    ChatChunk,
    ChunkChannel,
    Config,
    ErrorCode,
    GenerateOptions,
    LLMProvider,
    Message,
    ProviderConfig,
    ProviderError,
    UnresolvedProviderExit,
    accumulate_chunks,
)
from .config import load_config
from .registry import LLMRegistry

__version__ = "0.1.0"

_LAZY_ADAPTERS = {
    "OpenAIProvider": "duckops_llm.openai",
    "OpenRouterProvider": "duckops_llm.openrouter",
    "LMStudioProvider": "duckops_llm.lmstudio",
    "OpenAICompatibleProvider": "duckops_llm.compatible",
    "GeminiProvider": "duckops_llm.gemini",
}


def __getattr__(name: str) -> Any:
    module_path = _LAZY_ADAPTERS.get(name)
    if module_path is None:
        raise AttributeError(f"module 'duckops_llm' has no attribute {name!r}")
    return getattr(import_module(module_path), name)


__all__ = [
    "__version__",
    "LLMProvider",
    "Message",
    "GenerateOptions",
    "ChatChunk",
    "ChunkChannel",
    "Config",
    "ProviderConfig",
    "ProviderError",
    "ErrorCode",
    "UnresolvedProviderExit",
    "CancellationToken",
    "CancelledError",
    "accumulate_chunks",
    "LLMRegistry",
    "load_config",
    *_LAZY_ADAPTERS,
]
