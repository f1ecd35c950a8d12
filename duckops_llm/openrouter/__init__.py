"""
OpenRouter provider package.

Exports:
- OpenRouterProvider: Adapter implementing LLMProvider for OpenRouter
- OPENROUTER_POOL: Connection pool sizing for its HTTP client
"""

from .client import OPENROUTER_POOL, OpenRouterProvider

__all__ = ["OpenRouterProvider", "OPENROUTER_POOL"]
