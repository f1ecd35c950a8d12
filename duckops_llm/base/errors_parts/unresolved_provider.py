"""
Fatal startup error raised when no provider can be resolved.

``LLMRegistry.must_get`` is reserved for wiring performed at startup; when
neither the requested nor the default provider is registered the process is
misconfigured and should stop. Subclassing ``SystemExit`` keeps this out of
ordinary ``except Exception`` handlers and gives the interpreter a
configuration-error exit status.
"""
from __future__ import annotations

import os

EX_CONFIG = getattr(os, "EX_CONFIG", 78)


class UnresolvedProviderExit(SystemExit):
    """Unrecoverable configuration error: no provider resolves for a name."""

    def __init__(self, name: str, default_name: str) -> None:
        super().__init__(EX_CONFIG)
        self.name = name
        self.default_name = default_name

    def __str__(self) -> str:
        return f"LLM provider not found: {self.name} (default: {self.default_name})"


__all__ = ["UnresolvedProviderExit", "EX_CONFIG"]
