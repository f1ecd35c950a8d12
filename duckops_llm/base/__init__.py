"""
Providers Base Package

Exports the provider-agnostic contracts, DTOs, error taxonomy, cancellation
and streaming primitives shared by every adapter.
"""

from .cancellation import CancellationToken, CancelledError, run_cancellable
from .dto import Config, ProviderConfig
from .errors import (
    ErrorCode,
    FailureClass,
    ProviderError,
    UnresolvedProviderExit,
    classify_exception,
)
from .interfaces import LLMProvider, SupportsClose
from .models import ChatChunk, GenerateOptions, Message, Role
from .streaming import ChunkChannel, accumulate_chunks
from .structured_output import generate_json, strip_code_fence

__all__ = [
    # Models
    "Role",
    "Message",
    "GenerateOptions",
    "ChatChunk",
    "ProviderConfig",
    "Config",
    # Interfaces
    "LLMProvider",
    "SupportsClose",
    # Errors
    "ErrorCode",
    "FailureClass",
    "ProviderError",
    "UnresolvedProviderExit",
    "classify_exception",
    # Cancellation & streaming
    "CancellationToken",
    "CancelledError",
    "run_cancellable",
    "ChunkChannel",
    "accumulate_chunks",
    # Structured output
    "generate_json",
    "strip_code_fence",
]
