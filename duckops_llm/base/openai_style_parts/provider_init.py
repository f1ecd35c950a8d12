"""Initialization dataclass for OpenAI-style providers.

Encapsulates common constructor parameters used by ``BaseOpenAIStyleProvider``.
No I/O occurs here; this is a pure data container.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..http import PoolConfig


@dataclass(frozen=True)
class _ProviderInit:
    """Initialization bundle for ``BaseOpenAIStyleProvider``.

    Attributes:
        provider_name: Identifier the adapter registers under.
        api_key: Credential string handed to the SDK client.
        base_url: API base URL; ``None`` keeps the SDK default endpoint.
        default_model: Model used when options don't name one.
        default_max_tokens: Token cap for non-streaming requests.
        default_temperature: Temperature for non-streaming requests, if any.
        logger_name: Structured logger name (e.g., ``duckops_llm.openai``).
        headers: Static headers injected on every HTTP request.
        pool: Connection-pool sizing; requires a custom HTTP client.
        timeout_seconds: Client-level timeout; ``None`` keeps the SDK default.
        list_models_for_health: Probe by listing models instead of
            retrieving the configured one.
    """

    provider_name: str
    api_key: str
    base_url: Optional[str]
    default_model: str
    default_max_tokens: Optional[int]
    logger_name: str
    default_temperature: Optional[float] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    pool: Optional[PoolConfig] = None
    timeout_seconds: Optional[float] = None
    list_models_for_health: bool = False

    @property
    def needs_http_client(self) -> bool:
        return bool(self.headers) or self.pool is not None or self.timeout_seconds is not None


__all__ = ["_ProviderInit"]
