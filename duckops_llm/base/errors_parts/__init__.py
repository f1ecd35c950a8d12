"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `duckops_llm.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import FailureClass, classify_exception, wrap_agent_failure
from .unresolved_provider import EX_CONFIG, UnresolvedProviderExit

__all__ = [
    "ErrorCode",
    "ProviderError",
    "FailureClass",
    "classify_exception",
    "wrap_agent_failure",
    "UnresolvedProviderExit",
    "EX_CONFIG",
]
