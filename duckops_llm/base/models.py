"""Provider-agnostic DTOs public surface.

Re-exports the dataclasses under ``duckops_llm.base.models_parts``.
"""

from .models_parts import (
    EMPTY_OPTIONS,
    ChatChunk,
    GenerateOptions,
    Message,
    Role,
    options_or_empty,
)

__all__ = [
    "Message",
    "Role",
    "GenerateOptions",
    "EMPTY_OPTIONS",
    "options_or_empty",
    "ChatChunk",
]
