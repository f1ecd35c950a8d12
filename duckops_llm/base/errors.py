"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``duckops_llm.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import FailureClass, classify_exception, wrap_agent_failure
from .errors_parts.unresolved_provider import EX_CONFIG, UnresolvedProviderExit

__all__ = [
    "ErrorCode",
    "ProviderError",
    "FailureClass",
    "classify_exception",
    "wrap_agent_failure",
    "UnresolvedProviderExit",
    "EX_CONFIG",
]
