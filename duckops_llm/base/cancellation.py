"""Cooperative cancellation primitives for provider operations.

Facade over ``duckops_llm.base.cancellation_parts``. Every adapter operation
accepts an optional ``CancellationToken``; blocking backend calls are wrapped
with ``run_cancellable`` so a cancelled token ends the wait promptly.
"""

from __future__ import annotations

from .cancellation_parts import (
    DEFAULT_POLL_INTERVAL,
    CancellationToken,
    CancelledError,
    close_quietly,
    run_cancellable,
)

__all__ = [
    "CancellationToken",
    "CancelledError",
    "run_cancellable",
    "close_quietly",
    "DEFAULT_POLL_INTERVAL",
]
