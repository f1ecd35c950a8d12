"""Cancellation parts package (one-class-per-file)."""

from .state import State
from .cancelled_error import CancelledError
from .cancellation_token import CancellationToken
from .cancellable_call import run_cancellable, close_quietly, DEFAULT_POLL_INTERVAL

__all__ = [
    "State",
    "CancelledError",
    "CancellationToken",
    "run_cancellable",
    "close_quietly",
    "DEFAULT_POLL_INTERVAL",
]
