"""Provider registry package."""

from .llm_registry import LLMRegistry
from .rwlock import ReadWriteLock

__all__ = ["LLMRegistry", "ReadWriteLock"]
