"""Thread-safe registry of named LLM providers with a fallback default.

Purpose
-------
Resolve a provider by name at call time. A lookup that misses falls back to
the provider registered under the default name, so callers can ask for a
specific backend without failing when it is not configured.

Construction from configuration
-------------------------------
``register_from_config`` builds the built-in adapters lazily with
``importlib.import_module`` so an SDK is only imported when its adapter is
actually configured:

- entries with an empty API key are skipped, except ``lmstudio``;
- ``openai``, ``openrouter`` and ``lmstudio`` map to their adapters;
- ``gemini`` is skipped (its client is built through the cancellable
  ``GeminiProvider.connect`` and registered by the application);
- any other name with a base URL becomes an ``OpenAICompatibleProvider``;
  without one it is dropped.

Concurrency
-----------
Lookups share the read side of a ``ReadWriteLock``; ``register`` and
``close`` take the write side.
"""

from __future__ import annotations

import logging
from importlib import import_module
from typing import Any, Dict, List, Mapping, Optional, Union

from ..base.dto import Config, ProviderConfig
from ..base.errors import ProviderError, UnresolvedProviderExit
from ..base.interfaces import LLMProvider, SupportsClose
from ..base.logging import LogContext, get_logger, log_event
from ..config.defaults import REGISTRY_DEFAULT_NAME
from .rwlock import ReadWriteLock

__all__ = ["LLMRegistry"]

_logger = get_logger("duckops_llm.registry")

# Built-in adapters: module path and class name, imported on demand.
_BUILTIN_ADAPTERS: Dict[str, tuple[str, str]] = {
    "openai": ("duckops_llm.openai.client", "OpenAIProvider"),
    "openrouter": ("duckops_llm.openrouter.client", "OpenRouterProvider"),
    "lmstudio": ("duckops_llm.lmstudio.client", "LMStudioProvider"),
}
_COMPATIBLE_ADAPTER = ("duckops_llm.compatible.client", "OpenAICompatibleProvider")

# Providers needing a cancellable construction path; the application registers them.
_EXTERNALLY_BUILT = frozenset({"gemini"})

# Providers usable without an API key.
_KEYLESS = frozenset({"lmstudio"})


def _load_adapter_class(spec: tuple[str, str]) -> type:
    module_path, class_name = spec
    return getattr(import_module(module_path), class_name)


def _build_adapter(name: str, cfg: ProviderConfig) -> Optional[LLMProvider]:
    """Instantiate the adapter for ``name`` or return ``None`` to skip it."""
    if name == "openai":
        return _load_adapter_class(_BUILTIN_ADAPTERS[name])(cfg.api_key, cfg.model or None)
    if name == "openrouter":
        return _load_adapter_class(_BUILTIN_ADAPTERS[name])(cfg.api_key, cfg.model or None)
    if name == "lmstudio":
        return _load_adapter_class(_BUILTIN_ADAPTERS[name])(
            base_url=cfg.base_url or None, model=cfg.model or None, api_key=cfg.api_key or None
        )
    if not cfg.base_url:
        return None
    return _load_adapter_class(_COMPATIBLE_ADAPTER)(name, cfg.api_key, cfg.base_url, cfg.model)


class LLMRegistry:
    """Name -> provider mapping with fallback to a default entry."""

    def __init__(self, default_name: str = "") -> None:
        self._default_name = default_name or REGISTRY_DEFAULT_NAME
        self._providers: Dict[str, LLMProvider] = {}
        self._lock = ReadWriteLock()

    @classmethod
    def from_config(cls, config: Config) -> "LLMRegistry":
        """Create a registry and register every usable configured provider."""
        registry = cls(config.default)
        registry.register_from_config(config.providers)
        return registry

    @property
    def default_name(self) -> str:
        return self._default_name

    def register(self, provider: Optional[LLMProvider]) -> None:
        """Insert or replace ``provider`` under its name; ``None`` is ignored."""
        if provider is None:
            return
        with self._lock.write_locked():
            self._providers[provider.provider_name] = provider

    def get(self, name: str) -> Optional[LLMProvider]:
        """Return the provider for ``name``, else the default one, else ``None``."""
        with self._lock.read_locked():
            provider = self._providers.get(name)
            if provider is not None:
                return provider
            return self._providers.get(self._default_name)

    def must_get(self, name: str) -> LLMProvider:
        """Like :meth:`get` but aborts the process when nothing resolves.

        Intended for startup wiring only.

        Raises:
            UnresolvedProviderExit: ``SystemExit`` with status ``EX_CONFIG``.
        """
        provider = self.get(name)
        if provider is None:
            log_event(
                _logger,
                "registry.unresolved",
                LogContext(provider=name),
                level=logging.CRITICAL,
                default_name=self._default_name,
                registered=sorted(self.list()),
            )
            raise UnresolvedProviderExit(name, self._default_name)
        return provider

    def default(self) -> Optional[LLMProvider]:
        with self._lock.read_locked():
            return self._providers.get(self._default_name)

    def list(self) -> List[str]:
        """Registered names in no particular order."""
        with self._lock.read_locked():
            return [*self._providers]

    def register_from_config(
        self, providers: Mapping[str, Union[ProviderConfig, Mapping[str, Any]]]
    ) -> None:
        for name, raw in providers.items():
            cfg = raw if isinstance(raw, ProviderConfig) else ProviderConfig.model_validate(raw)
            if not cfg.api_key and name not in _KEYLESS:
                log_event(_logger, "registry.skip", LogContext(provider=name), level=logging.DEBUG, reason="missing_api_key")
                continue
            if name in _EXTERNALLY_BUILT:
                log_event(_logger, "registry.skip", LogContext(provider=name), level=logging.DEBUG, reason="external_construction")
                continue
            adapter = _build_adapter(name, cfg)
            if adapter is None:
                log_event(_logger, "registry.skip", LogContext(provider=name), level=logging.DEBUG, reason="missing_base_url")
                continue
            self.register(adapter)

    def close(self) -> None:
        """Close every registered provider that owns resources.

        Every closable provider is attempted even when one fails; the first
        failure is then raised as a ``ProviderError`` (``INTERNAL`` unless the
        adapter already raised a ``ProviderError``).
        """
        with self._lock.write_locked():
            providers = [*self._providers.values()]
        first_error: Optional[ProviderError] = None
        for provider in providers:
            if not isinstance(provider, SupportsClose):
                continue
            try:
                provider.close()
            except Exception as exc:  # noqa: BLE001 - remaining providers still need closing
                err = ProviderError.from_exception(exc)
                log_event(
                    _logger,
                    "registry.close_error",
                    LogContext(provider=provider.provider_name),
                    level=logging.ERROR,
                    error=err.to_dict(),
                )
                if first_error is None:
                    first_error = err
        if first_error is not None:
            raise first_error
