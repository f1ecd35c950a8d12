"""OpenAI-compatible provider package."""

from .client import OpenAICompatibleProvider

__all__ = ["OpenAICompatibleProvider"]
