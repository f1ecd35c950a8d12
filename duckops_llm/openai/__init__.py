"""
OpenAI provider package.

Exports:
- OpenAIProvider: Adapter implementing LLMProvider for OpenAI
"""

from .client import OpenAIProvider

__all__ = ["OpenAIProvider"]
