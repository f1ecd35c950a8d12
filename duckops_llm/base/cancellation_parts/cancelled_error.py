"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
of provider operations.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancellation request.

    Distinguishes cooperative cancellation from backend failures so callers
    can stop quietly instead of reporting a provider error.
    """

__all__ = ["CancelledError"]
