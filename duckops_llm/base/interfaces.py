"""
Provider-agnostic Protocols for the providers layer.

Re-exports the single-class modules under
``duckops_llm.base.interfaces_parts`` to keep imports stable.
"""

from __future__ import annotations

from .interfaces_parts import LLMProvider, SupportsClose

__all__ = ["LLMProvider", "SupportsClose"]
