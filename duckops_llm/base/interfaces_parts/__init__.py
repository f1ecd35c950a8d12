"""Interfaces parts package (one-class-per-file)."""

from .llm_provider import LLMProvider
from .supports_close import SupportsClose

__all__ = ["LLMProvider", "SupportsClose"]
