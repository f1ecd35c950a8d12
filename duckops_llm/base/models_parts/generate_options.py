"""
Per-call generation overrides.

Every field is optional. Numeric values that are ``None`` or ``<= 0`` count as
"not set" and an empty model name likewise falls back to the adapter default.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GenerateOptions:
    """Optional overrides applied on top of an adapter's defaults."""

    model: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None

    def resolve_model(self, default: str) -> str:
        return self.model or default

    def max_tokens_or(self, default: Optional[int]) -> Optional[int]:
        return self.max_tokens if self.max_tokens and self.max_tokens > 0 else default

    def temperature_or(self, default: Optional[float]) -> Optional[float]:
        return self.temperature if self.temperature and self.temperature > 0 else default

    def top_p_or(self, default: Optional[float]) -> Optional[float]:
        return self.top_p if self.top_p and self.top_p > 0 else default


EMPTY_OPTIONS = GenerateOptions()


def options_or_empty(options: Optional[GenerateOptions]) -> GenerateOptions:
    """Return ``options`` or the shared empty instance."""
    return options if options is not None else EMPTY_OPTIONS


__all__ = ["GenerateOptions", "EMPTY_OPTIONS", "options_or_empty"]
